# billwise/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# API Keys
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")

# Runtime parameters
BATCH_SIZE = 15
FUZZY_THRESHOLD = 85
CONCURRENCY = 50
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Places search
DEFAULT_RADIUS_M = 5000
MAX_PLACES = 5
MAX_REVIEWS = 3

# URLs
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"

# File names
INPUT_CSV = os.getenv("INPUT_CSV", "bills.csv")
OUTPUT_CSV = os.getenv("OUTPUT_CSV", "bills_categorized.csv")
