from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse
from app.shared.database.models import User
from app.core.auth.dependencies import get_current_user
from app.core.auth.throttle import login_throttle

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(request: Request, db: Session, email: str, password: str) -> TokenResponse:
    client_host = request.client.host if request.client else "unknown"
    login_throttle.hit(f"{client_host}-{email.lower()}")

    user = db.query(User).filter(User.email == email).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        logger.info(f"Login fallido para {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo"
        )

    access_token = AuthService.create_access_token(data={
        "user_id": user.id,
        "email": user.email,
        "role": user.role.value
    })

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Endpoint de login para obtener token de acceso

    **Parámetros:**
    - **username**: Email del usuario
    - **password**: Contraseña del usuario
    """
    return _authenticate(request, db, form_data.username, form_data.password)


@router.post("/login-json", response_model=TokenResponse)
async def login_json(
    request: Request,
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """Endpoint de login alternativo que acepta JSON"""
    return _authenticate(request, db, user_login.email, user_login.password)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Obtener información del usuario actual

    **Headers requeridos:**
    - Authorization: Bearer {token}
    """
    return UserResponse.model_validate(current_user)
