ALL_CATEGORIES = "all"

MATERIAL_CATEGORIES = [
    "Eau Libre",
    "Water Polo",
    "Natation Artistique",
    "Chronométrage",
    "Informatique",
    "Audiovisuel",
    "Autre",
]

STATUS_AVAILABLE = "available"
STATUS_LOANED = "loaned"
STATUS_IN_MAINTENANCE = "in_maintenance"
STATUS_LOST = "lost"

MATERIAL_STATUSES = [STATUS_AVAILABLE, STATUS_LOANED, STATUS_IN_MAINTENANCE, STATUS_LOST]

MATERIAL_CONDITIONS = ["excellent", "good", "average", "poor"]

DEFAULT_LOAN_DAYS = 30

# Accepted upload window for material pictures
IMAGE_MIN_BYTES = 1024
IMAGE_MAX_BYTES = 10 * 1024 * 1024

INITIAL_MATERIALS = [
    {
        "id": "1",
        "name": "Chrono à Bande",
        "category": "Eau Libre",
        "location": "Limoges",
        "status": STATUS_AVAILABLE,
        "condition": "good",
        "quantity": 1,
    },
    {
        "id": "2",
        "name": "Bouées Directionnelles",
        "category": "Eau Libre",
        "location": "Limoges",
        "status": STATUS_AVAILABLE,
        "condition": "good",
        "quantity": 6,
    },
    {
        "id": "3",
        "name": "Talkies Walkies",
        "category": "Eau Libre",
        "location": "Limoges",
        "status": STATUS_AVAILABLE,
        "condition": "good",
        "quantity": 12,
    },
    {
        "id": "4",
        "name": "PC Bureau",
        "category": "Informatique",
        "brand": "ASUS",
        "model": "Intel",
        "serial_number": "xx11a871",
        "reference": "001_24",
        "location": "Bordeaux",
        "status": STATUS_AVAILABLE,
        "condition": "good",
        "responsible": "Toto",
        "observations": "Avec wifi",
        "quantity": 1,
    },
]
