from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ballotbox.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta=None):
    to_encode = data.copy()
    if expires_delta:
        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    else:
        to_encode.update({"exp": datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def get_current_user(request: Request, credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> str:
    """Return the caller identity carried in the token's ``sub`` claim."""
    if credentials:
        token = credentials.credentials
    else:
        # Cookie form is "Bearer <jwt>"
        cookie = request.cookies.get("access_token")
        if not cookie:
            raise HTTPException(status_code=401, detail="Missing token")
        try:
            token = cookie.split(" ")[1]
        except IndexError:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    identity = payload.get("sub")
    if identity is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return identity
