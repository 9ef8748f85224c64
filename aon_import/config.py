# aon_import/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# Catalog backend: "http", "local" or empty for no catalog
CATALOG_BACKEND = os.getenv("CATALOG_BACKEND", "").strip().lower()
CATALOG_URL = os.getenv("CATALOG_URL", "http://localhost:8080/api")
CATALOG_API_KEY = os.getenv("CATALOG_API_KEY")
CATALOG_MANIFEST = os.getenv("CATALOG_MANIFEST", "system.json")

# Only catalogs tagged with this game system are searched
GAME_SYSTEM = os.getenv("GAME_SYSTEM", "pf2e")

# Runtime parameters
BATCH_SIZE = int(os.getenv("BATCH_SIZE", "1"))
CONCURRENCY = 20
RETRIEVE_DOCUMENTS = os.getenv("RETRIEVE_DOCUMENTS", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# File names
INPUT_FILE = os.getenv("INPUT_FILE", "aon_export.csv")
OUTPUT_CSV = os.getenv("OUTPUT_CSV", "aon_matches.csv")
