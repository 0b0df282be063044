"""Category taxonomy and keyword table shared across the pipeline."""

from newsdesk.schemas.article import Category

# Order matters: the categorizer returns the first category with a match.
CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.TECHNOLOGY: (
        "technology",
        "tech",
        "software",
        "artificial intelligence",
        "computer",
        "smartphone",
        "internet",
        "cyber",
        "digital",
        "robot",
        "gadget",
        "silicon",
    ),
    Category.BUSINESS: (
        "business",
        "economy",
        "market",
        "stock",
        "finance",
        "company",
        "trade",
        "investment",
        "earnings",
        "revenue",
        "bank",
    ),
    Category.SPORTS: (
        "sport",
        "football",
        "soccer",
        "basketball",
        "baseball",
        "tennis",
        "olympic",
        "championship",
        "league",
        "tournament",
        "athlete",
    ),
    Category.ENTERTAINMENT: (
        "entertainment",
        "movie",
        "film",
        "music",
        "celebrity",
        "hollywood",
        "television",
        "concert",
        "album",
        "actor",
        "actress",
    ),
    Category.HEALTH: (
        "health",
        "medical",
        "hospital",
        "disease",
        "vaccine",
        "doctor",
        "patient",
        "wellness",
        "virus",
        "medicine",
    ),
    Category.SCIENCE: (
        "science",
        "research",
        "scientist",
        "space",
        "nasa",
        "climate",
        "physics",
        "biology",
        "discovery",
    ),
    Category.POLITICS: (
        "politic",
        "election",
        "government",
        "president",
        "senate",
        "congress",
        "parliament",
        "minister",
        "vote",
    ),
}

# Categories requested from the providers on every cycle
AGGREGATION_CATEGORIES: tuple[str, ...] = (
    "technology",
    "business",
    "sports",
    "entertainment",
    "health",
    "science",
    "general",
)

# Relevance points awarded by reader interactions
INTERACTION_POINTS: dict[str, int] = {
    "view": 0,
    "click": 2,
    "share": 2,
    "like": 3,
    "bookmark": 0,
}
OPEN_ARTICLE_POINTS = 1
