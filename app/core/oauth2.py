from fastapi.security import HTTPBearer

# auto_error is off so a missing header (401) can be told apart from a bad token (403)
bearer_scheme = HTTPBearer(auto_error=False)
