"""
Resolver API ViewSets.
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from resolver.exceptions import ResolverError
from resolver.models import BomEntry, Order, Transformation
from resolver.services.intake import place_client_order
from .serializers import (
    BomEntrySerializer,
    ClientOrderSerializer,
    OrderSerializer,
    TransformationSerializer,
)


class TransformationViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for Transformation (read-only).

    list: List transformations (?to_piece=<id> for the producers of a piece)
    retrieve: Get a specific transformation
    """

    permission_classes = [IsAuthenticated]
    queryset = Transformation.objects.select_related("from_piece", "to_piece")
    serializer_class = TransformationSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        to_piece = self.request.query_params.get("to_piece")
        if to_piece:
            qs = qs.filter(to_piece_id=to_piece)
        return qs


class OrderViewSet(
    mixins.CreateModelMixin,
    viewsets.ReadOnlyModelViewSet,
):
    """
    ViewSet for Order.

    list: List orders
    create: Place an order from a client order document
    retrieve: Get a specific order
    bom: BOM entries of the order
    """

    permission_classes = [IsAuthenticated]
    queryset = Order.objects.select_related("piece", "client")
    serializer_class = OrderSerializer

    def create(self, request, *args, **kwargs):
        """
        Place a client order.

        POST /api/resolver/orders/
        """
        document = ClientOrderSerializer(data=request.data)
        document.is_valid(raise_exception=True)

        try:
            order = place_client_order(document.validated_data)
        except ResolverError as e:
            return Response(e.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def bom(self, request, pk=None):
        """
        BOM entries of an order, by piece then step.

        GET /api/resolver/orders/{pk}/bom/
        """
        order = self.get_object()
        entries = order.bom_entries.select_related("transformation").order_by(
            "piece_number", "step_number", "id"
        )
        return Response(BomEntrySerializer(entries, many=True).data)


class BomEntryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for BomEntry (read-only).

    list: List entries (?order=<id> for one order)
    retrieve: Get a specific entry
    """

    permission_classes = [IsAuthenticated]
    queryset = BomEntry.objects.select_related("transformation")
    serializer_class = BomEntrySerializer

    def get_queryset(self):
        qs = super().get_queryset()
        order = self.request.query_params.get("order")
        if order:
            qs = qs.filter(order_id=order)
        return qs
