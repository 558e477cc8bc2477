import logging
from rest_framework import generics

from savingsproducts.models import SavingsProduct
from savingsproducts.serializers import SavingsProductSerializer
from accounts.permissions import IsSystemAdminOrReadOnly, is_system_admin

logger = logging.getLogger(__name__)


class SavingsProductListCreateView(generics.ListCreateAPIView):
    queryset = SavingsProduct.objects.all()
    serializer_class = SavingsProductSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]

    def get_queryset(self):
        # Members only see products they can still sign up for
        if is_system_admin(self.request.user):
            return self.queryset
        return self.queryset.filter(is_active=True)

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(f"Savings product '{product.name}' created by {self.request.user}")


class SavingsProductDetailView(generics.RetrieveUpdateAPIView):
    queryset = SavingsProduct.objects.all()
    serializer_class = SavingsProductSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]
    lookup_field = "reference"
