import math

from django.core.paginator import InvalidPage
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PagedResultsPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 200

    def paginate_queryset(self, queryset, request, view=None):
        page_size = self.get_page_size(request)
        if not page_size:
            return None

        paginator = self.django_paginator_class(queryset, page_size)
        page_number = self.get_page_number(request, paginator)
        try:
            self.page = paginator.page(page_number)
        except InvalidPage:
            # Past the last page (e.g. after a batch delete): report an empty page.
            try:
                number = max(int(page_number), 1)
            except (TypeError, ValueError):
                number = 1
            self.page = paginator.get_page(paginator.num_pages)
            self.page_number_override = number
            self.request = request
            return []

        self.page_number_override = None
        self.request = request
        return list(self.page)

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        page_size = self.page.paginator.per_page
        page = self.page_number_override or self.page.number
        return Response(
            {
                "items": data,
                "total": total,
                "page": page,
                "page_size": page_size,
                "total_pages": math.ceil(total / page_size) if page_size else 0,
            }
        )
