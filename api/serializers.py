"""
Resolver API Serializers.
"""

from rest_framework import serializers

from resolver.models import BomEntry, Order, Piece, Transformation


class TransformationSerializer(serializers.ModelSerializer):
    """Serializer for Transformation model."""

    from_piece_name = serializers.CharField(source="from_piece.name", read_only=True)
    to_piece_name = serializers.CharField(source="to_piece.name", read_only=True)

    class Meta:
        model = Transformation
        fields = [
            "id",
            "from_piece",
            "from_piece_name",
            "to_piece",
            "to_piece_name",
            "tool",
            "quantity",
            "cost",
        ]
        read_only_fields = fields


class BomEntrySerializer(serializers.ModelSerializer):
    """Serializer for BomEntry model."""

    tool = serializers.CharField(source="transformation.tool", read_only=True)

    class Meta:
        model = BomEntry
        fields = [
            "id",
            "order",
            "transformation",
            "tool",
            "piece_number",
            "pieces_total",
            "step_number",
            "steps_total",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Serializer for Order model."""

    piece_name = serializers.CharField(source="piece.name", read_only=True)
    client_name = serializers.CharField(source="client.name", read_only=True)
    bom_entries_count = serializers.IntegerField(source="bom_entries.count", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "number",
            "piece",
            "piece_name",
            "client",
            "client_name",
            "quantity",
            "due_date",
            "late_pen",
            "early_pen",
            "bom_entries_count",
            "created_at",
        ]
        read_only_fields = fields


# ── Intake ──


class ClientSerializer(serializers.Serializer):
    """Client part of an order document."""

    name_id = serializers.CharField(max_length=100)


class OrderDocumentSerializer(serializers.Serializer):
    """Order part of an order document."""

    number = serializers.IntegerField(min_value=0)
    work_piece = serializers.CharField(max_length=20)
    quantity = serializers.IntegerField(min_value=1)
    due_date = serializers.IntegerField(min_value=0)
    late_pen = serializers.CharField(max_length=50)
    early_pen = serializers.CharField(max_length=50)

    def validate_work_piece(self, value):
        if not Piece.objects.filter(name=value).exists():
            raise serializers.ValidationError(f"Unknown piece '{value}'.")
        return value


class ClientOrderSerializer(serializers.Serializer):
    """
    Serializer for the intake document.

    {"client": {"name_id": ...}, "order": {"number": ..., "work_piece": ..., ...}}
    """

    client = ClientSerializer()
    order = OrderDocumentSerializer()
