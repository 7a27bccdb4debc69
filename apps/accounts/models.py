from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class AuthProvider(models.TextChoices):
    LOCAL = 'LOCAL', 'Local'
    LDAP = 'LDAP', 'LDAP'
    OAUTH2 = 'OAUTH2', 'OAuth2'


class Theme(models.TextChoices):
    LIGHT = 'light', 'Light'
    DARK = 'dark', 'Dark'


class UserManager(BaseUserManager):
    """Custom user manager for username-based authentication."""

    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError('Username is required')

        email = extra_fields.pop('email', None)
        extra_fields['email'] = self.normalize_email(email) if email else None

        user = self.model(username=username, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(username, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Application user.

    Local users authenticate with a password. Directory (LDAP / OAuth2) users
    carry the identifiers of the directory groups and distribution lists they
    belong to.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=50, unique=True, db_index=True)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    full_name = models.CharField(max_length=100, blank=True)

    # Authentication source
    auth_provider = models.CharField(
        max_length=10, choices=AuthProvider.choices, default=AuthProvider.LOCAL
    )
    external_id = models.CharField(max_length=255, blank=True)
    directory_groups = models.JSONField(default=list, blank=True)
    email_verified = models.BooleanField(default=False)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Preferences
    theme = models.CharField(max_length=10, choices=Theme.choices, default=Theme.LIGHT)
    profile_description = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['created_at']),
        ]
        ordering = ['username']

    def __str__(self):
        return self.username

    def get_display_name(self):
        """Return full name or username."""
        return self.full_name or self.username

    def get_principal_identifiers(self):
        """Identifiers that RC grants can target: directory groups plus own username."""
        identifiers = [str(group) for group in (self.directory_groups or []) if group]
        identifiers.append(self.username)
        return identifiers
