"""ASGI entrypoint for the face tagger API.

Serve with ``uvicorn face_tagger.api.asgi:app`` (install the ``serve`` extra).
"""

from face_tagger.api.app import create_app
from face_tagger.containers import build_container

app = create_app(build_container())
