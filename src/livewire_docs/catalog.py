"""Static tables describing the Livewire documentation site.

Categories, the slug -> category table, the known ``wire:`` directives with
their modifier variants, and the helpers that normalize directive names.
Everything here is read-only for the lifetime of the process.
"""

from types import MappingProxyType

DIRECTIVE_PREFIX = "wire:"

# Storage partitions, in the order lookups probe them.
CATEGORIES: tuple[str, ...] = (
    "getting-started",
    "essentials",
    "features",
    "volt",
    "directives",
    "advanced",
)

DIRECTIVES_CATEGORY = "directives"

DEFAULT_CATEGORY = "features"

CATEGORY_TITLES = MappingProxyType(
    {
        "getting-started": "Getting Started",
        "essentials": "Essentials",
        "features": "Features",
        "volt": "Volt",
        "directives": "Directives",
        "advanced": "Advanced",
    }
)

# Insertion order matters: partial matches take the first key found.
CATEGORY_MAP = MappingProxyType(
    {
        "quickstart": "getting-started",
        "installation": "getting-started",
        "upgrade": "getting-started",
        "upgrading": "getting-started",
        "components": "essentials",
        "properties": "essentials",
        "actions": "essentials",
        "forms": "essentials",
        "events": "essentials",
        "lifecycle-hooks": "essentials",
        "nesting": "essentials",
        "testing": "essentials",
        "alpine": "features",
        "lazy": "features",
        "validation": "features",
        "uploads": "features",
        "file-uploads": "features",
        "pagination": "features",
        "computed-properties": "features",
        "offline": "features",
        "polling": "features",
        "navigate": "features",
        "teleport": "features",
        "volt": "volt",
        "morphing": "advanced",
        "hydration": "advanced",
        "security": "advanced",
        "javascript": "advanced",
        "troubleshooting": "advanced",
    }
)

# Code containing any of these is written against the functional (Volt) API.
FUNCTIONAL_MARKERS: tuple[str, ...] = (
    "use function Livewire\\Volt",
    "Volt::",
    "state([",
)

KNOWN_DIRECTIVES: tuple[str, ...] = (
    "wire:model",
    "wire:click",
    "wire:submit",
    "wire:loading",
    "wire:target",
    "wire:dirty",
    "wire:offline",
    "wire:navigate",
    "wire:poll",
    "wire:init",
    "wire:key",
    "wire:ignore",
    "wire:replace",
    "wire:transition",
    "wire:confirm",
    "wire:stream",
)

DIRECTIVE_DESCRIPTIONS = MappingProxyType(
    {
        "wire:model": "Bind an input element's value to a component property for two-way data binding",
        "wire:click": "Trigger a component action when the element is clicked",
        "wire:submit": "Handle form submission and trigger a component action",
        "wire:loading": "Show, hide, or modify elements while a component is processing a request",
        "wire:target": "Scope loading indicators to specific actions or properties",
        "wire:dirty": "Show, hide, or modify elements when form data has been changed",
        "wire:offline": "Show, hide, or modify elements when the browser loses network connection",
        "wire:navigate": "Enable SPA-style navigation without full page reloads",
        "wire:poll": "Automatically refresh component data at specified intervals",
        "wire:init": "Execute a component action when the component is first rendered",
        "wire:key": "Provide a unique identifier for elements in loops to help Livewire track changes",
        "wire:ignore": "Exclude an element from Livewire's DOM diffing/morphing",
        "wire:replace": "Replace the entire element instead of morphing on updates",
        "wire:transition": "Apply CSS transitions when elements are added or removed",
        "wire:confirm": "Show a confirmation dialog before executing an action",
        "wire:stream": "Stream content updates to a specific element for real-time UI updates",
    }
)

GENERIC_DIRECTIVE_DESCRIPTION = "Livewire directive"

# (syntax, description) pairs per directive
DIRECTIVE_VARIANTS = MappingProxyType(
    {
        "wire:model": (
            ("wire:model", "Two-way binding, updates on change event"),
            ("wire:model.live", "Updates on every input event (keystroke)"),
            ("wire:model.blur", "Updates when input loses focus"),
            ("wire:model.change", "Updates on change event (default)"),
            ("wire:model.lazy", "Alias for .change"),
            ("wire:model.debounce.500ms", "Debounce updates by specified time"),
            ("wire:model.throttle.500ms", "Throttle updates by specified time"),
            ("wire:model.live.debounce.500ms", "Live updates with debounce"),
            ("wire:model.fill", "Only set initial value, one-way from server"),
        ),
        "wire:click": (
            ("wire:click", "Trigger action on click"),
            ("wire:click.prevent", "Prevent default behavior"),
            ("wire:click.stop", "Stop event propagation"),
            ("wire:click.self", "Only trigger if clicked element is the target"),
            ("wire:click.throttle.500ms", "Throttle clicks"),
            ("wire:click.debounce.500ms", "Debounce clicks"),
        ),
        "wire:submit": (
            ("wire:submit", "Handle form submission"),
            ("wire:submit.prevent", "Prevent default form submission"),
        ),
        "wire:loading": (
            ("wire:loading", "Show element during any loading"),
            ("wire:loading.remove", "Hide element during loading"),
            ('wire:loading.class="opacity-50"', "Add class during loading"),
            ('wire:loading.class.remove="hidden"', "Remove class during loading"),
            ('wire:loading.attr="disabled"', "Add attribute during loading"),
            ("wire:loading.delay", "Delay showing by 200ms"),
            ("wire:loading.delay.long", "Delay showing by 500ms"),
        ),
        "wire:target": (
            ('wire:target="methodName"', "Only show loading for specific action"),
            ('wire:target="save, update"', "Target multiple actions"),
        ),
        "wire:dirty": (
            ("wire:dirty", "Show when form has unsaved changes"),
            ("wire:dirty.remove", "Hide when form has unsaved changes"),
            ('wire:dirty.class="border-yellow-500"', "Add class when dirty"),
        ),
        "wire:offline": (
            ("wire:offline", "Show when browser is offline"),
            ("wire:offline.remove", "Hide when offline"),
            ('wire:offline.class="opacity-50"', "Add class when offline"),
        ),
        "wire:navigate": (
            ("wire:navigate", "SPA-style navigation without full page reload"),
            ("wire:navigate.hover", "Prefetch page on hover"),
        ),
        "wire:poll": (
            ("wire:poll", "Poll every 2.5 seconds (default)"),
            ("wire:poll.5s", "Poll every 5 seconds"),
            ("wire:poll.visible", "Only poll when element is visible"),
            ("wire:poll.keep-alive", "Continue polling even when tab is inactive"),
            ('wire:poll="refreshData"', "Call specific method on poll"),
        ),
        "wire:init": (
            ('wire:init="loadData"', "Call method when component is rendered"),
        ),
        "wire:key": (
            ('wire:key="unique-id"', "Unique identifier for list items"),
        ),
        "wire:ignore": (
            ("wire:ignore", "Ignore element during DOM diffing"),
            ("wire:ignore.self", "Only ignore the element itself, not children"),
        ),
        "wire:replace": (
            ("wire:replace", "Replace entire element on update instead of morphing"),
        ),
        "wire:transition": (
            ("wire:transition", "Apply transitions when element appears/disappears"),
            ("wire:transition.opacity", "Fade transition"),
            ("wire:transition.scale", "Scale transition"),
        ),
        "wire:confirm": (
            ('wire:confirm="Are you sure?"', "Show confirmation dialog before action"),
            (
                'wire:confirm.prompt="Type DELETE to confirm|DELETE"',
                "Require specific input",
            ),
        ),
        "wire:stream": (
            ('wire:stream="propertyName"', "Stream content updates to element"),
        ),
    }
)


def strip_prefix(name: str) -> str:
    """Remove a leading ``wire:`` from a directive name."""
    if name.startswith(DIRECTIVE_PREFIX):
        return name[len(DIRECTIVE_PREFIX) :]
    return name


def base_directive(name: str) -> str:
    """Drop the modifier chain: ``wire:model.live.debounce`` -> ``wire:model``."""
    return name.split(".", 1)[0]


def directive_key(name: str) -> str:
    """File key for a directive: ``wire:model.live`` and ``model`` both give ``model``."""
    return base_directive(strip_prefix(name.strip()))


def categorize(slug: str, default: str = DEFAULT_CATEGORY) -> str:
    """Map a page slug to its category.

    Exact table hits win; otherwise the first table key contained in the
    slug decides; anything else falls back to ``default``.
    """
    if slug in CATEGORY_MAP:
        return CATEGORY_MAP[slug]

    for key, category in CATEGORY_MAP.items():
        if key in slug:
            return category

    return default
