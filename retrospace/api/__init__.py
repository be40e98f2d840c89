from fastapi import APIRouter
from retrospace.api import users, posts, messages

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
