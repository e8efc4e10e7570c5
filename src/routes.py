import logging
from typing import Optional

import jwt
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings

logger = logging.getLogger(__name__)

# Router for organizing routes
base_routes = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


# Central function to handle token validation
def validate_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="No token found. Please create an account and log in.",
        )
    try:
        return jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": bool(settings.JWT_AUDIENCE)},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=401, detail="Token expired. Please log in again."
        )
    except jwt.InvalidTokenError as e:
        logger.error(f"Token validation error: {str(e)}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")


# ROOT ROUTE
@base_routes.get("/")
def home():
    return {
        "message": f"Welcome to {settings.BUSINESS_NAME} Invoicing!",
        "description": "API backend for creating, storing and sharing travel invoices.",
        "default endpoints": [
            "Invoice Draft",
            "Invoices",
            "Invoice Documents / PDF / WhatsApp Share",
            "Analytics",
            "Account",
        ],
        "note": "Interactive API documentation is served at /docs.",
    }


# Signed-in user, as carried by the auth provider's token
@base_routes.get("/account")
def get_account(token: dict = Depends(validate_token)):
    return {
        "user_id": token.get("sub"),
        "email": token.get("email"),
        "business_name": settings.BUSINESS_NAME,
    }
