import logging
from rest_framework import generics

from accounts.permissions import IsSystemAdminOrReadOnly, is_system_admin
from loanproducts.models import LoanProduct
from loanproducts.serializers import LoanProductSerializer

logger = logging.getLogger(__name__)


class LoanProductListCreateView(generics.ListCreateAPIView):
    queryset = LoanProduct.objects.all()
    serializer_class = LoanProductSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]

    def get_queryset(self):
        if is_system_admin(self.request.user):
            return self.queryset
        return self.queryset.filter(is_active=True)

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(f"Loan product '{product.name}' created by {self.request.user}")


class LoanProductDetailView(generics.RetrieveUpdateAPIView):
    queryset = LoanProduct.objects.all()
    serializer_class = LoanProductSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]
    lookup_field = "reference"
