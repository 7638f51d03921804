from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkboard.core.settings import get_settings


def add_cors_middleware(app: FastAPI):
    settings = get_settings()

    # Session cookies need credentialed requests, which browsers reject
    # against a wildcard origin; echo the caller's origin instead.
    origins = settings.cors_origins_list
    wildcard = origins == ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[] if wildcard else origins,
        allow_origin_regex=".*" if wildcard else None,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
