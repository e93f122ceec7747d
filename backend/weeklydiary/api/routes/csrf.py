"""
CSRF token issuance.
"""
from fastapi import APIRouter, Response
from weeklydiary.core.csrf import issue_token, set_csrf_cookie

router = APIRouter(tags=["csrf"])


@router.get("/csrf")
def get_csrf_token(response: Response):
    """Issue a fresh token in both the cookie and the body."""
    token = issue_token()
    set_csrf_cookie(response, token)
    return {"csrfToken": token}
