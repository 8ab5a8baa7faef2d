from dotenv import load_dotenv
import os

load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


# Base & cache directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CACHE_DIR = os.getenv("PLAYLIST_BUILDER_CACHE_DIR", os.path.join(BASE_DIR, "cache"))

# Job records (progress of background runs started through the API)
JOBS_FILE = os.path.join(CACHE_DIR, "jobs.json")

# A pending/running job older than this no longer blocks new runs for its
# playlist (the process that owned it is assumed dead).
JOB_STALE_AFTER_SECONDS = _env_int("JOB_STALE_AFTER_SECONDS", 3600)

# How many finished jobs are kept in JOBS_FILE; active jobs are always kept
JOBS_KEEP_FINISHED = _env_int("JOBS_KEEP_FINISHED", 50)

# Web player session credentials, copied from the request headers of
# open.spotify.com. Only the CLI reads these; the API takes them per request.
SPOTIFY_AUTHORIZATION = os.getenv("SPOTIFY_AUTHORIZATION")
SPOTIFY_CLIENT_TOKEN = os.getenv("SPOTIFY_CLIENT_TOKEN")

# Partner GraphQL endpoint shared by all operations
SPOTIFY_PATHFINDER_URL = os.getenv(
    "SPOTIFY_PATHFINDER_URL",
    "https://api-partner.spotify.com/pathfinder/v1/query",
)
REQUEST_TIMEOUT_SECONDS = _env_int("REQUEST_TIMEOUT_SECONDS", 30)

# Number of items (albums, playlists, tracks) per page
ITEMS_PER_PAGE = _env_int("ITEMS_PER_PAGE", 50)

# How many tracks to pick from one album or playlist in a single pass.
# Larger sources get their remaining tracks stashed for backfill.
MIN_TRACKS_PER_SOURCE = _env_int("MIN_TRACKS_PER_SOURCE", 3)

# Upper bounds on how many tracks are fetched per source
MAX_TRACKS_PER_ALBUM = _env_int("MAX_TRACKS_PER_ALBUM", 50)
MAX_TRACKS_PER_PLAYLIST = _env_int("MAX_TRACKS_PER_PLAYLIST", 50)

# How much of the target playlist is fetched for the ownership check and dedup.
# Tracks beyond this cap are not seen by the dedup step.
TARGET_PLAYLIST_MAX_TRACKS = _env_int("TARGET_PLAYLIST_MAX_TRACKS", 1000)

# How many tracks are added when the caller does not say
DEFAULT_PLAYLIST_SIZE = _env_int("DEFAULT_PLAYLIST_SIZE", 500)

# Max tracks per addToPlaylist request
ADD_TRACKS_BATCH_SIZE = _env_int("ADD_TRACKS_BATCH_SIZE", 99)

# URI prefixes
ID_PREFIX_ALBUM = "spotify:album:"
ID_PREFIX_PLAYLIST = "spotify:playlist:"
ID_PREFIX_TRACK = "spotify:track:"
ID_PREFIX_USER = "spotify:user:"

# GraphQL operation names (`operationName`)
OPERATION_LIBRARY_V3 = "libraryV3"
OPERATION_GET_ALBUM = "getAlbum"
OPERATION_FETCH_PLAYLIST = "fetchPlaylist"
OPERATION_ADD_TO_PLAYLIST = "addToPlaylist"

# Persisted query hashes. The server knows the query text, clients only send
# the hash. They change whenever Spotify changes the underlying queries.
PERSISTED_QUERY_HASHES = {
    OPERATION_LIBRARY_V3: "17d801ba80f3a3d7405966641818c334fe32158f97e9e8b38f1a92f764345df9",
    OPERATION_GET_ALBUM: "46ae954ef2d2fe7732b4b2b4022157b2e18b7ea84f70591ceb164e4de1b5d5d3",
    OPERATION_FETCH_PLAYLIST: "73a3b3470804983e4d55d83cd6cc99715019228fd999d51429cc69473a18789d",
    OPERATION_ADD_TO_PLAYLIST: "200b7618afd05364c4aafb95e2070249ed87ee3f08fc4d2f1d5d04fdf1a516d9",
}

# libraryV3 feature flags sent with every listing request
LIBRARY_FEATURES = ["LIKED_SONGS", "YOUR_EPISODES"]

# addToPlaylist insert position
ADD_POSITION_MOVE_TYPE = "BOTTOM_OF_PLAYLIST"
