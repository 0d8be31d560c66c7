# ---------- routes/auth_routes.py ----------
"""
Auth routes over the namespace's local account registry.
No tokens are issued: the session is the namespace's "userId" key, selected
by the X-Client-Id header.
"""
from fastapi import APIRouter, Depends, HTTPException

from tunimind.exceptions import AccountExistsError, AccountNotFoundError, NotAuthenticatedError
from tunimind.schemas.auth_schemas import SignUpRequest, SignInRequest, ResetPasswordRequest, ProfileUpdateRequest
from tunimind.services.auth_service import AuthService
from tunimind.storage import LocalStorage, get_storage

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Routes ────────────────────────────────────────────────────────
@router.post("/signup")
async def signup(body: SignUpRequest, storage: LocalStorage = Depends(get_storage)):
    """Register a new local account and sign it in."""
    try:
        result = AuthService(storage).sign_up(body.email, body.password, body.name, body.profile_image)
        return {"status": "success", "data": result}
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/login")
async def login(body: SignInRequest, storage: LocalStorage = Depends(get_storage)):
    """Sign in with email + password."""
    try:
        service = AuthService(storage)
        if not service.sign_in(body.email, body.password):
            raise HTTPException(status_code=401, detail="Invalid email or password. Please check your credentials or sign up.")
        return {"status": "success", "data": service.current_session()}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/logout")
async def logout(storage: LocalStorage = Depends(get_storage)):
    AuthService(storage).logout()
    return {"status": "success", "data": {"message": "Logged out"}}


@router.get("/me")
async def me(storage: LocalStorage = Depends(get_storage)):
    """Return the signed-in user and profile."""
    session = AuthService(storage).current_session()
    if not session:
        raise HTTPException(status_code=401, detail="No user logged in")
    return {"status": "success", "data": session}


@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest, storage: LocalStorage = Depends(get_storage)):
    try:
        AuthService(storage).reset_password(body.email)
        return {"status": "success", "data": {"message": "Check your email for a password reset link."}}
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/profile")
async def update_profile(body: ProfileUpdateRequest, storage: LocalStorage = Depends(get_storage)):
    try:
        profile = AuthService(storage).update_profile(body.model_dump(exclude_unset=True))
        return {"status": "success", "data": profile}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
