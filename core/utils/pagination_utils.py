# =================================PAGINATION=================================
from rest_framework import pagination
from rest_framework.exceptions import NotFound


class CustomPagination(pagination.PageNumberPagination):
    page_size = 10  # Default page size
    page_size_query_param = 'limit'
    max_page_size = 100  # Larger limits are cut down to this
    page_query_param = 'page'

    def paginate_queryset(self, queryset, request, view=None):
        page_number = request.query_params.get(self.page_query_param)

        try:
            return super().paginate_queryset(queryset, request, view)
        except NotFound:
            raise NotFound(detail=f"Invalid page number: {page_number}")

    def get_paginated_response(self, data=None):
        """Pagination block of the envelope: {page, limit, total, pages}"""
        paginator = self.page.paginator
        return {
            'page': self.page.number,
            'limit': paginator.per_page,
            'total': paginator.count,
            'pages': paginator.num_pages if paginator.count else 0,
        }
