# backend/services/search_params.py
# Names accepted by ShoeService.find(). Values arrive as untyped strings.

SEARCH_PARAM_NAMES = (
    "article_code",
    "rating",
    "category",
    "price",
    "discount_rate",
    "available",
    "release_date",
    "homepage",
    "tags",
    "model",
)

# Boolean flags, each selecting one canonical tag
TAG_FLAGS = {
    "sport": "SPORT",
    "vintage": "VINTAGE",
    "streetware": "STREETWARE",
}
