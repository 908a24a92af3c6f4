from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meetup.errors import install_error_handlers
from meetup.logs import configure_logging, logRequests
from meetup.routes.event import router as eventRouter
from meetup.routes.group import router as groupRouter
from meetup.routes.session import router as sessionRouter
from meetup.routes.user import router as userRouter
from meetup.settings import settings

configure_logging(settings.log_level)

app = FastAPI(title="Meetup Groups and Events")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(logRequests)

install_error_handlers(app)

app.include_router(sessionRouter)
app.include_router(userRouter)
app.include_router(groupRouter)
app.include_router(eventRouter)

@app.get("/health")
def healthCheck():
    return {
        "status": "OK",
        "service": "meetup-backend"
    }
