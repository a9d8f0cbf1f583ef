from fastapi.security import HTTPBearer

# Tokens are issued by the external identity provider; we only read the Authorization header
bearer_scheme = HTTPBearer(auto_error=False)
