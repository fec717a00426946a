FONT_CHOICES = [
    "Playfair Display",
    "Montserrat",
    "Roboto",
    "Lato",
    "Dancing Script",
    "Great Vibes",
]

DEFAULT_FONT = "Playfair Display"
DEFAULT_ACCENT_COLOR = "#8b4513"

MEAL_CHOICES = [
    ("beef", "Beef"),
    ("chicken", "Chicken"),
    ("fish", "Fish"),
    ("vegetarian", "Vegetarian"),
    ("vegan", "Vegan"),
]
MEAL_VALUES = {value for value, _ in MEAL_CHOICES}

SLUG_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
SLUG_LENGTH = 8

PASSWORD_MIN_LENGTH = 8

# Password reset links expire after one hour
RESET_TOKEN_MAX_AGE = 3600
RESET_TOKEN_SALT = "pwd-reset"

DEFAULT_TEMPLATES = [
    {
        "name": "Classic Elegance",
        "description": "Serif lettering on an ivory card.",
        "thumbnail_url": "/static/templates/classic.png",
        "is_premium": False,
    },
    {
        "name": "Garden Party",
        "description": "Watercolour florals framing the details.",
        "thumbnail_url": "/static/templates/garden.png",
        "is_premium": False,
    },
    {
        "name": "Modern Minimal",
        "description": "Clean sans-serif layout with generous whitespace.",
        "thumbnail_url": "/static/templates/minimal.png",
        "is_premium": False,
    },
    {
        "name": "Gilded Night",
        "description": "Gold foil accents on a midnight background.",
        "thumbnail_url": "/static/templates/gilded.png",
        "is_premium": True,
    },
]
