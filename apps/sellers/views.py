from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.billing.serializers import BatchResultSerializer
from apps.store.exceptions import StoreError
from . import services
from .exceptions import SellerNotFoundError, SellersServiceError
from .serializers import SellerInputSerializer, SellerSerializer, ErrorSerializer


class SellerViewSet(viewsets.ViewSet):
    """
    Sellers and their item catalogs.

    list: All sellers, oldest first
    create: Create a seller with items
    retrieve: Get one seller
    update: Replace a seller's fields (creates it if the id is gone)
    destroy: Delete a seller and all of its purchases
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: SellerSerializer(many=True), 502: ErrorSerializer}, tags=['sellers'])
    def list(self, request):
        try:
            sellers = services.list_sellers()
        except StoreError as e:
            return Response({'error': f"Error loading sellers: {e}"}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(SellerSerializer(sellers, many=True).data)

    @extend_schema(
        request=SellerInputSerializer,
        responses={201: SellerSerializer, 400: ErrorSerializer, 502: ErrorSerializer},
        tags=['sellers'],
    )
    def create(self, request):
        return self._save(request, seller_id=None)

    @extend_schema(responses={200: SellerSerializer, 404: ErrorSerializer}, tags=['sellers'])
    def retrieve(self, request, pk=None):
        try:
            seller = services.get_seller(seller_id=pk)
        except SellerNotFoundError as e:
            return Response({'error': f"Error loading seller: {e}"}, status=status.HTTP_404_NOT_FOUND)
        except StoreError as e:
            return Response({'error': f"Error loading seller: {e}"}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(SellerSerializer(seller).data)

    @extend_schema(
        request=SellerInputSerializer,
        responses={200: SellerSerializer, 201: SellerSerializer, 400: ErrorSerializer},
        tags=['sellers'],
    )
    def update(self, request, pk=None):
        return self._save(request, seller_id=pk)

    @extend_schema(
        responses={200: BatchResultSerializer, 404: ErrorSerializer, 502: BatchResultSerializer},
        description="Delete a seller, then each of its purchases. Not atomic.",
        tags=['sellers'],
    )
    def destroy(self, request, pk=None):
        try:
            result = services.delete_seller(seller_id=pk)
        except SellerNotFoundError as e:
            return Response({'error': f"Error deleting seller: {e}"}, status=status.HTTP_404_NOT_FOUND)
        except StoreError as e:
            return Response({'error': f"Error deleting seller: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

        if not result.is_complete:
            return Response(result.to_dict(), status=status.HTTP_502_BAD_GATEWAY)
        return Response(result.to_dict())

    def _save(self, request, seller_id):
        serializer = SellerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            seller, created = services.save_seller(
                name=data['name'],
                contact=data.get('contact', ''),
                items=data['items'],
                seller_id=seller_id,
            )
        except SellersServiceError as e:
            return Response({'error': f"Error saving seller: {e}"}, status=status.HTTP_400_BAD_REQUEST)
        except StoreError as e:
            return Response({'error': f"Error saving seller: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(
            SellerSerializer(seller).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )
