# Log event / error codes emitted by the shorten_url handler
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
ID_SPACE_EXHAUSTED = 'ID_SPACE_EXHAUSTED'
STORAGE_FAILURE = 'STORAGE_FAILURE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
