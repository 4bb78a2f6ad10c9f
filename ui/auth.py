import os
import secrets
from fastapi import HTTPException, status
from fastapi.security import HTTPBasic

# auto_error off: routes decide per request whether auth is required
basic_security = HTTPBasic(auto_error=False)

API_USERNAME = os.environ.get("API_USERNAME", "admin")
API_PASSWORD = os.environ.get("API_PASSWORD", "admin123")


def check_credentials(credentials):
    """Raise 401 unless credentials match; None counts as missing."""
    if credentials is not None:
        correct_username = secrets.compare_digest(credentials.username.encode(), API_USERNAME.encode())
        correct_password = secrets.compare_digest(credentials.password.encode(), API_PASSWORD.encode())
        if correct_username and correct_password:
            return credentials.username
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Basic"},
    )
