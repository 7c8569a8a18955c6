from flask_jwt_extended import JWTManager, create_access_token

from utils.errors import InvalidToken, Unauthenticated, error_response

jwt = JWTManager()


def issue_token(user) -> str:
    """
    Sign a bearer token for ``user``.
    Lifetime comes from JWT_ACCESS_TOKEN_EXPIRES (24h by default).
    """
    return create_access_token(
        identity=str(user.id),
        additional_claims={
            "id": user.id,
            "username": user.username,
            "role": user.role,
        },
    )


@jwt.unauthorized_loader
def _missing_token(reason):
    return error_response(Unauthenticated())


@jwt.invalid_token_loader
def _invalid_token(reason):
    return error_response(InvalidToken())


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return error_response(InvalidToken("Token has expired."))
