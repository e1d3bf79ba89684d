"""
Material-season mapping and rain-resistance keywords.

Used by the compatibility scorer to judge season fit for items that
carry no season tags, and to decide whether an outfit copes with rain.
"""

from wardrobe.models import Season

# ── Season tag aliases ────────────────────────────────────────────

SEASON_ALIASES: dict = {
    "spring": Season.SPRING,
    "summer": Season.SUMMER,
    "fall": Season.FALL,
    "autumn": Season.FALL,
    "winter": Season.WINTER,
}

# Tags meaning "wearable in every season"
ALL_SEASON_TAGS = frozenset({
    "all", "all season", "all-season", "all seasons", "year-round",
    "year round", "seasonless",
})

# ── Materials suited for each season ──────────────────────────────

SEASON_MATERIALS: dict = {
    Season.SUMMER: {
        "good": frozenset({
            "linen", "cotton", "silk", "chambray", "seersucker", "mesh",
            "jersey", "bamboo", "poplin", "canvas",
        }),
        "bad": frozenset({
            "wool", "cashmere", "fleece", "velvet", "corduroy",
            "sherpa", "down", "heavy knit", "tweed", "flannel", "shearling",
        }),
    },
    Season.WINTER: {
        "good": frozenset({
            "wool", "cashmere", "fleece", "velvet", "corduroy",
            "sherpa", "down", "heavy knit", "leather", "suede",
            "thermal", "tweed", "merino", "flannel", "shearling",
        }),
        "bad": frozenset({
            "linen", "seersucker", "mesh", "canvas",
        }),
    },
    Season.SPRING: {
        "good": frozenset({
            "cotton", "linen", "denim", "jersey", "chambray",
            "light knit", "poplin", "oxford", "canvas",
        }),
        "bad": frozenset({
            "heavy knit", "sherpa", "down", "thermal", "shearling",
        }),
    },
    Season.FALL: {
        "good": frozenset({
            "wool", "cashmere", "denim", "corduroy", "suede",
            "leather", "flannel", "knit", "tweed", "merino", "oxford",
        }),
        "bad": frozenset({
            "linen", "seersucker", "mesh",
        }),
    },
}

# ── Rain ──────────────────────────────────────────────────────────

WEATHER_RESISTANT_MATERIALS = frozenset({
    "leather", "rubber", "nylon", "polyester", "gore-tex", "goretex",
    "waxed cotton", "waxed canvas", "neoprene", "technical",
})

# Whole words in material / subcategory / name that signal rain gear
WEATHER_RESISTANT_KEYWORDS = (
    "waterproof", "water-resistant", "water resistant", "rain", "raincoat",
    "rainproof", "gore-tex", "waxed", "boots", "boot", "parka", "trench",
    "shell", "anorak",
)
