# Log event / error codes emitted by the redirect_url handler
MISSING_SHORT_ID = 'MISSING_SHORT_ID'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORAGE_FAILURE = 'STORAGE_FAILURE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
