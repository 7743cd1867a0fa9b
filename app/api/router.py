from fastapi import APIRouter

from app.api.routes import auth, conference, payments, reviews, submissions, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(conference.router)
api_router.include_router(submissions.router)
api_router.include_router(reviews.router)
api_router.include_router(payments.router)
