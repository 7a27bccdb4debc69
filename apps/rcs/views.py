from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.audit.decorators import audited

from .models import ResponsibilityCentre
from .serializers import (
    ResponsibilityCentreSerializer,
    ResponsibilityCentreCreateSerializer,
    ResponsibilityCentreUpdateSerializer,
    CloneRequestSerializer,
    RCAccessSerializer,
    GrantUserAccessSerializer,
    GrantGroupAccessSerializer,
    UpdateAccessSerializer,
    MyAccessSerializer,
)
from .services import (
    list_user_responsibility_centres,
    create_responsibility_centre,
    get_responsibility_centre,
    update_responsibility_centre,
    delete_responsibility_centre,
    clone_responsibility_centre,
    get_permissions_for_rc,
    grant_user_access,
    grant_group_access,
    update_permission,
    revoke_access,
    get_rc,
    get_visible_access_level,
    is_owner,
    can_edit_content,
)


class ResponsibilityCentreViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Responsibility Centres.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: RCs the user owns, has been granted, or the Demo RC
    create: Create an RC owned by the user
    retrieve: Get an RC with the user's access level
    update / partial_update: Update an RC (owner only)
    destroy: Delete an RC and all its contents (owner only)
    clone: Deep-clone an RC
    """

    queryset = ResponsibilityCentre.objects.select_related('owner')
    serializer_class = ResponsibilityCentreSerializer
    permission_classes = [IsAuthenticated]

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return ResponsibilityCentreCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return ResponsibilityCentreUpdateSerializer
        elif self.action == 'clone':
            return CloneRequestSerializer
        return ResponsibilityCentreSerializer

    def list(self, request, *args, **kwargs):
        rcs = list_user_responsibility_centres(user=request.user)
        return Response(ResponsibilityCentreSerializer(rcs, many=True).data)

    def retrieve(self, request, pk=None, *args, **kwargs):
        rc = get_responsibility_centre(rc_id=pk, user=request.user)
        return Response(ResponsibilityCentreSerializer(rc).data)

    @audited('CREATE', 'RESPONSIBILITY_CENTRE')
    def create(self, request, *args, **kwargs):
        """Create a new RC."""
        serializer = ResponsibilityCentreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rc = create_responsibility_centre(user=request.user, **serializer.validated_data)
        return Response(ResponsibilityCentreSerializer(rc).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'RESPONSIBILITY_CENTRE')
    def update(self, request, pk=None, *args, **kwargs):
        serializer = ResponsibilityCentreUpdateSerializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        rc = update_responsibility_centre(rc_id=pk, user=request.user, **serializer.validated_data)
        return Response(ResponsibilityCentreSerializer(rc).data)

    @audited('DELETE', 'RESPONSIBILITY_CENTRE')
    def destroy(self, request, pk=None, *args, **kwargs):
        delete_responsibility_centre(rc_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    @audited('CLONE', 'RESPONSIBILITY_CENTRE')
    def clone(self, request, pk=None, *args, **kwargs):
        """Deep-clone an RC under a new name."""
        serializer = CloneRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        clone = clone_responsibility_centre(
            rc_id=pk,
            user=request.user,
            new_name=serializer.validated_data['new_name'],
        )
        return Response(ResponsibilityCentreSerializer(clone).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Sharing
# =============================================================================

@extend_schema(
    responses={200: RCAccessSerializer(many=True)},
    description="List grants on an RC. Owners only. The original owner is always listed.",
    tags=['access'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def access_list(request, rc_id):
    grants = get_permissions_for_rc(rc_id=rc_id, user=request.user)
    return Response(RCAccessSerializer(grants, many=True).data)


@extend_schema(
    request=GrantUserAccessSerializer,
    responses={201: RCAccessSerializer},
    description="Grant a user access to an RC. Owners only.",
    tags=['access'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@audited('GRANT_ACCESS', 'RC_ACCESS')
def grant_user(request, rc_id):
    serializer = GrantUserAccessSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    access = grant_user_access(rc_id=rc_id, granted_by=request.user, **serializer.validated_data)
    return Response(RCAccessSerializer(access).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=GrantGroupAccessSerializer,
    responses={201: RCAccessSerializer},
    description="Grant an LDAP group or distribution list access to an RC. Owners only.",
    tags=['access'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@audited('GRANT_ACCESS', 'RC_ACCESS')
def grant_group(request, rc_id):
    serializer = GrantGroupAccessSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    access = grant_group_access(rc_id=rc_id, granted_by=request.user, **serializer.validated_data)
    return Response(RCAccessSerializer(access).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UpdateAccessSerializer,
    responses={200: RCAccessSerializer, 204: None},
    description="Change (PUT) or revoke (DELETE) a grant. Owners only.",
    tags=['access'],
)
@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
@audited('CHANGE_ACCESS', 'RC_ACCESS')
def access_detail(request, rc_id, access_id):
    if request.method == 'DELETE':
        revoke_access(rc_id=rc_id, access_id=access_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = UpdateAccessSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    access = update_permission(
        rc_id=rc_id,
        access_id=access_id,
        access_level=serializer.validated_data['access_level'],
        user=request.user,
    )
    return Response(RCAccessSerializer(access).data)


@extend_schema(
    responses={200: MyAccessSerializer},
    description="The current user's access level on an RC.",
    tags=['access'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_access(request, rc_id):
    rc = get_rc(rc_id)
    return Response({
        'access_level': get_visible_access_level(rc=rc, user=request.user),
        'is_owner': is_owner(rc=rc, user=request.user),
        'can_edit': can_edit_content(rc=rc, user=request.user),
    })
