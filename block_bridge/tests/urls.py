from django.http import HttpResponse
from django.template import loader
from django.urls import path

from block_bridge.assets import get_asset_queue
from block_bridge.modes import detect_render_mode


def page(request):
    return HttpResponse(loader.render_to_string("pages/page.html", request=request))


def mode(request):
    queued = ",".join(get_asset_queue().styles)
    return HttpResponse(f"{detect_render_mode().value}|{queued}")


urlpatterns = [
    path("page/", page),
    path("mode/", mode),
    path("api/block-renderer/demo/", mode),
]
