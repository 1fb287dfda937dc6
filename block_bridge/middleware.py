from asgiref.sync import iscoroutinefunction

from .assets import reset_asset_queue, start_asset_queue
from .requests import reset_current_request, set_current_request


class BlockBridgeMiddleware:
    """Expose the current request to mode detection and scope queued assets to it."""

    def __init__(self, get_response):
        self.get_response = get_response
        self._is_async = iscoroutinefunction(get_response)

    def __call__(self, request):
        if self._is_async:
            return self._acall(request)
        token = set_current_request(request)
        start_asset_queue()
        try:
            response = self.get_response(request)
        finally:
            reset_asset_queue()
            reset_current_request(token)
        return response

    async def _acall(self, request):
        token = set_current_request(request)
        start_asset_queue()
        try:
            response = await self.get_response(request)
        finally:
            reset_asset_queue()
            reset_current_request(token)
        return response
