from django.conf import settings
from django.core.paginator import EmptyPage, Paginator


def _positive_int(value, default):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def paginate(queryset, request, default_limit=None):
    """
    Page a queryset by the ``page``/``limit`` query parameters.

    Returns the page items and the paging metadata. A page past the end is
    simply empty, and an empty result has zero pages.
    """
    default_limit = default_limit or settings.PAGE_SIZE
    page = _positive_int(request.query_params.get('page'), 1)
    limit = min(_positive_int(request.query_params.get('limit'), default_limit), settings.MAX_PAGE_SIZE)

    paginator = Paginator(queryset, limit)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    meta = {
        'total': paginator.count,
        'total_pages': paginator.num_pages if paginator.count else 0,
        'current_page': page,
    }
    return items, meta
