from rest_framework.authentication import TokenAuthentication, get_authorization_header

from core.exceptions import AuthenticationError


class BearerTokenAuthentication(TokenAuthentication):
    """Token auth accepting both "Token <key>" and "Bearer <key>" headers."""
    keywords = (b'token', b'bearer')

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() not in self.keywords:
            return None

        if len(auth) == 1:
            raise AuthenticationError('No token, authorization denied')
        if len(auth) > 2:
            raise AuthenticationError('Invalid token header. Token string should not contain spaces.')

        try:
            key = auth[1].decode()
        except UnicodeError:
            raise AuthenticationError('Invalid token header. Token string should not contain invalid characters.')
        return self.authenticate_credentials(key)
