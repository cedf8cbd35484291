"""
Authentication API views for Warehouse Stock Backend.
"""
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from apps.api.authentication import JWTService
from apps.api.serializers import LoginSerializer, WarehousemanSerializer
from apps.users.services.auth_service import AuthService


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """
    Secret-code login endpoint.
    Opens a session and returns a JWT bound to it.
    """
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    session_id = JWTService.new_session_id()
    warehouseman = AuthService.login(serializer.validated_data['secret_key'], session_id)

    if warehouseman is None:
        return Response(
            {'error': 'Invalid secret code. Please try again.'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    return Response({
        'tokens': JWTService.generate_token(warehouseman, session_id),
        'warehouseman': WarehousemanSerializer(warehouseman).data
    })


@api_view(['GET'])
def me(request):
    """
    Get the logged-in warehouseman.
    """
    return Response(WarehousemanSerializer(request.user).data)


@api_view(['POST'])
def logout(request):
    """
    Close the session named by the token; the token stops working.
    """
    AuthService.logout(request.auth['sid'])
    return Response({'message': 'Successfully logged out'})
