from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Theme


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'full_name',
            'display_name',
            'auth_provider',
            'theme',
            'profile_description',
            'directory_groups',
            'created_at',
            'last_login',
        ]
        read_only_fields = [
            'id', 'username', 'auth_provider', 'theme', 'directory_groups',
            'created_at', 'last_login',
        ]


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    username = serializers.CharField(max_length=50)
    email = serializers.EmailField(required=False, allow_blank=True)
    full_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ThemeSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=Theme.choices)


class DirectoryEntrySerializer(serializers.Serializer):
    """A user, group or distribution list returned by directory search."""

    identifier = serializers.CharField()
    display_name = serializers.CharField()
    email = serializers.CharField(required=False)
