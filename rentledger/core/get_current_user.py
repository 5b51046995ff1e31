from fastapi import Request

from rentledger.identity.supabase import AuthIdentity

from .validators import extract_bearer_token


async def get_current_landlord(request: Request) -> AuthIdentity:
    """
    Resolve the bearer token to a landlord identity.

    Runs on every protected request; the identity provider is asked each time.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    identity = await request.app.state.identity.verify(token)
    request.state.identity = identity
    return identity


def get_gateway(request: Request):
    return request.app.state.gateway


def get_gateway_breaker(request: Request):
    return request.app.state.gateway_breaker
