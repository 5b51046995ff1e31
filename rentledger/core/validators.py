from rentledger.core.exceptions import Unauthenticated


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise Unauthenticated("No token provided")

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()

    if scheme.lower() != "bearer" or not token or " " in token:
        raise Unauthenticated("Malformed Authorization header, expected 'Bearer <token>'")

    return token
