from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ThemeSerializer,
    DirectoryEntrySerializer,
)
from .services import (
    register_user,
    authenticate_user,
    get_login_methods,
    update_theme,
    is_username_available,
    search_users,
    search_groups,
    search_distribution_lists,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to invalidate", required=False)


class LoginMethodsResponseSerializer(serializers.Serializer):
    local = serializers.BooleanField()
    ldap = serializers.BooleanField()
    oauth2 = serializers.BooleanField()


class UsernameAvailabilitySerializer(serializers.Serializer):
    username = serializers.CharField()
    available = serializers.BooleanField()


def _token_payload(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new local user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    user = register_user(**data)

    return Response({
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _token_payload(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        username=serializer.validated_data['username'],
        password=serializer.validated_data['password'],
    )

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _token_payload(user),
    })


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. A supplied refresh token is validated before the session ends.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout and discard the refresh token."""
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token'
            }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=UserSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's profile (email, full_name, profile_description).",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    serializer = UserSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)


@extend_schema(
    request=ThemeSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Set the current user's UI theme (light or dark).",
    tags=['auth'],
)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def set_theme(request):
    """Persist the UI theme preference."""
    user = update_theme(user=request.user, theme=request.data.get('theme'))
    return Response(UserSerializer(user).data)


@extend_schema(
    responses={200: LoginMethodsResponseSerializer},
    description="List the login methods enabled on this deployment.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def login_methods(request):
    return Response(get_login_methods())


@extend_schema(
    parameters=[OpenApiParameter('username', str, required=True)],
    responses={200: UsernameAvailabilitySerializer},
    description="Check whether a username is still available for registration.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def check_username(request):
    username = request.query_params.get('username', '')
    return Response({
        'username': username,
        'available': is_username_available(username),
    })


DIRECTORY_PARAMETERS = [
    OpenApiParameter('q', str, required=True, description="Search text"),
    OpenApiParameter('max', int, required=False, description="Maximum results (1-50, default 10)"),
]


@extend_schema(
    parameters=DIRECTORY_PARAMETERS,
    responses={200: DirectoryEntrySerializer(many=True)},
    description="Search users that can be granted access to a Responsibility Centre.",
    tags=['directory'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def directory_users(request):
    results = search_users(query=request.query_params.get('q', ''), max_results=request.query_params.get('max'))
    return Response(DirectoryEntrySerializer(results, many=True).data)


@extend_schema(
    parameters=DIRECTORY_PARAMETERS,
    responses={200: DirectoryEntrySerializer(many=True)},
    description="Search LDAP security groups.",
    tags=['directory'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def directory_groups(request):
    results = search_groups(query=request.query_params.get('q', ''), max_results=request.query_params.get('max'))
    return Response(DirectoryEntrySerializer(results, many=True).data)


@extend_schema(
    parameters=DIRECTORY_PARAMETERS,
    responses={200: DirectoryEntrySerializer(many=True)},
    description="Search mail distribution lists.",
    tags=['directory'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def directory_distribution_lists(request):
    results = search_distribution_lists(
        query=request.query_params.get('q', ''),
        max_results=request.query_params.get('max'),
    )
    return Response(DirectoryEntrySerializer(results, many=True).data)
