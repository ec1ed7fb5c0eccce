import logging

from django.views.decorators.http import require_safe
from django.views.static import serve

from infrastructure.container import container


logger = logging.getLogger(__name__)

# Keys are never reused.
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


@require_safe
def serve_product_image(request, path):
    """
    Serve a stored product image by its key.

    Unauthenticated and independent of DEBUG. Unknown names raise Http404
    from django.views.static.serve.
    """
    storage = container.storage()
    response = serve(request, path, document_root=str(storage.root))
    response["Cache-Control"] = IMMUTABLE_CACHE_CONTROL
    return response
