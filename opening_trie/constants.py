# Default endpoints and limits shared across modules
USER_AGENT = "Opening-Trie/1.0"
CHESS_COM_API_ROOT = "https://api.chess.com"
REQUEST_TIMEOUT = 30
DEFAULT_BRANCH_LIMIT = 20
