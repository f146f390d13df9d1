import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from api.echo import router as echo_router
from api.profiles import router as profiles_router
from casebridge.encoder import camel_case_response_class
from casebridge.middleware import SnakeCaseParamsMiddleware

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="camelCase on the wire, snake_case in the handlers",
    version="0.1.0",
    default_response_class=camel_case_response_class(settings.json_indent),
)

app.add_middleware(
    SnakeCaseParamsMiddleware,
    convert_query_params=settings.convert_query_params,
    convert_body_params=settings.convert_body_params,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(echo_router)
app.include_router(profiles_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
