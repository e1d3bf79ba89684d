"""
Color compatibility tables.

Colors are the categories produced by ``wardrobe.enrichment.resolve_color``
(plus any free-text color the catalog supplies). Lookup precedence:
unknown > same > clashing > both neutral > one neutral > analogous >
complementary > other.
"""

from typing import FrozenSet, List, Set, Tuple

# Pairs that read as a mismatch even though one side may be neutral
CLASHING_PAIRS: List[FrozenSet[str]] = [
    frozenset({"red", "green"}),
    frozenset({"red", "burgundy"}),
    frozenset({"blue", "green"}),
    frozenset({"brown", "black"}),
]

ANALOGOUS_GROUPS: List[Set[str]] = [
    {"red", "orange", "coral", "rust", "terracotta", "burgundy"},
    {"orange", "yellow", "gold", "mustard"},
    {"yellow", "green", "lime", "olive"},
    {"green", "teal", "mint", "sage", "emerald", "forest", "olive"},
    {"teal", "blue", "aqua", "turquoise"},
    {"blue", "navy", "indigo", "cobalt", "denim", "sky blue"},
    {"indigo", "purple", "violet", "plum"},
    {"purple", "pink", "magenta", "lilac", "lavender"},
    {"pink", "red", "rose", "blush", "berry"},
]

COMPLEMENTARY_PAIRS: List[Tuple[Set[str], Set[str]]] = [
    ({"red", "berry", "burgundy", "wine", "maroon"},
     {"teal", "emerald", "forest", "sage"}),
    ({"blue", "cobalt", "indigo", "denim"},
     {"orange", "rust", "terracotta"}),
    ({"purple", "plum", "violet"},
     {"yellow", "gold", "mustard"}),
    ({"pink", "blush", "rose"},
     {"mint", "sage", "olive", "lime"}),
]

# Leather accessory families for belt/shoe coordination
BLACK_LEATHER_FAMILY = frozenset({"black", "charcoal", "grey"})
BROWN_LEATHER_FAMILY = frozenset({
    "brown", "tan", "khaki", "camel", "chocolate", "beige", "taupe",
    "stone", "cream",
})
