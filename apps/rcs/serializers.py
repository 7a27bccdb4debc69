from rest_framework import serializers

from .models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType


class ResponsibilityCentreSerializer(serializers.ModelSerializer):
    """RC with the requesting user's access level."""

    owner_username = serializers.CharField(source='owner.username', read_only=True)
    access_level = serializers.SerializerMethodField()
    is_owner = serializers.SerializerMethodField()
    can_edit = serializers.SerializerMethodField()
    is_demo = serializers.BooleanField(read_only=True)

    class Meta:
        model = ResponsibilityCentre
        fields = [
            'id',
            'name',
            'description',
            'owner_username',
            'active',
            'training_include_in_summary',
            'travel_include_in_summary',
            'access_level',
            'is_owner',
            'can_edit',
            'is_demo',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_access_level(self, obj):
        return getattr(obj, 'access_level', None)

    def get_is_owner(self, obj):
        return self.get_access_level(obj) == AccessLevel.OWNER

    def get_can_edit(self, obj):
        return self.get_access_level(obj) in (AccessLevel.OWNER, AccessLevel.READ_WRITE)


class ResponsibilityCentreCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class ResponsibilityCentreUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)
    training_include_in_summary = serializers.BooleanField(required=False)
    travel_include_in_summary = serializers.BooleanField(required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class CloneRequestSerializer(serializers.Serializer):
    new_name = serializers.CharField(max_length=100)


class RCAccessSerializer(serializers.ModelSerializer):
    """Grant listing. The original owner's synthetic entry has no id."""

    rc_id = serializers.IntegerField(source='responsibility_centre_id', read_only=True)
    granted_by = serializers.SerializerMethodField()
    is_original_owner = serializers.SerializerMethodField()

    class Meta:
        model = RCAccess
        fields = [
            'id',
            'rc_id',
            'principal_identifier',
            'principal_display_name',
            'principal_type',
            'access_level',
            'granted_by',
            'granted_at',
            'is_original_owner',
        ]
        read_only_fields = fields

    def get_granted_by(self, obj):
        return obj.granted_by.username if obj.granted_by_id else None

    def get_is_original_owner(self, obj):
        rc = obj.responsibility_centre
        if obj.user_id is not None:
            return obj.user_id == rc.owner_id
        return obj.principal_type == PrincipalType.USER and obj.principal_identifier == rc.owner.username


class GrantUserAccessSerializer(serializers.Serializer):
    principal_identifier = serializers.CharField(max_length=255)
    access_level = serializers.ChoiceField(choices=AccessLevel.choices)


class GrantGroupAccessSerializer(serializers.Serializer):
    principal_identifier = serializers.CharField(max_length=255)
    principal_display_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    principal_type = serializers.ChoiceField(choices=PrincipalType.choices)
    access_level = serializers.ChoiceField(choices=AccessLevel.choices)


class UpdateAccessSerializer(serializers.Serializer):
    access_level = serializers.ChoiceField(choices=AccessLevel.choices)


class MyAccessSerializer(serializers.Serializer):
    access_level = serializers.CharField(allow_null=True)
    is_owner = serializers.BooleanField()
    can_edit = serializers.BooleanField()
