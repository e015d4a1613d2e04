from dotenv import load_dotenv
import os

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/callback"
)

# Where /callback sends the browser once the code has been exchanged
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://127.0.0.1:3000/")

# Comma separated list, e.g. "http://localhost:3000,https://queue.example.com"
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-read-private",
    "user-read-email",
    "playlist-read-private",
    "playlist-read-collaborative",
    "user-read-playback-state",
    "user-modify-playback-state",
]

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("SONG_QUEUE_LOG_LEVEL", "INFO")

# Queue policy
MAX_TRACK_DURATION_MS = 5 * 60 * 1000
SEARCH_LIMIT = int(os.getenv("SEARCH_LIMIT", "5"))

# Team / admin sessions
SESSION_TIMEOUT_SECONDS = int(os.getenv("SESSION_TIMEOUT_SECONDS", str(24 * 60 * 60)))
SESSION_HEADER = "X-Session-Token"

# Identity lookup: "file" (local JSON) or "appwrite" (hosted document database)
IDENTITY_BACKEND = os.getenv("IDENTITY_BACKEND", "file")
IDENTITY_CODES_FILE = os.getenv(
    "IDENTITY_CODES_FILE", os.path.join(BASE_DIR, "identity_codes.json")
)

APPWRITE_ENDPOINT = os.getenv("APPWRITE_ENDPOINT", "https://cloud.appwrite.io/v1")
APPWRITE_PROJECT_ID = os.getenv("APPWRITE_PROJECT_ID", "")
APPWRITE_API_KEY = os.getenv("APPWRITE_API_KEY", "")
APPWRITE_DATABASE_ID = os.getenv("APPWRITE_DATABASE_ID", "")
APPWRITE_TEAMS_COLLECTION_ID = os.getenv("APPWRITE_TEAMS_COLLECTION_ID", "teams")
APPWRITE_ADMIN_COLLECTION_ID = os.getenv("APPWRITE_ADMIN_COLLECTION_ID", "admin")

# Polling client
API_BASE_URL = os.getenv("SONG_QUEUE_API_URL", "http://127.0.0.1:8888")
QUEUE_POLL_INTERVAL_SECONDS = float(os.getenv("QUEUE_POLL_INTERVAL_SECONDS", "3"))
QUEUE_READ_RETRIES = 3
QUEUE_READ_RETRY_DELAY_SECONDS = 1.0
