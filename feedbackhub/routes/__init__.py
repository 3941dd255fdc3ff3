# feedbackhub/routes/__init__.py
from fastapi import APIRouter
from feedbackhub.routes.feedback import feedback_routes, vote_routes, comment_routes
from feedbackhub.routes.websites import website_routes
from feedbackhub.routes.categories import category_routes
from feedbackhub.routes.analytics import analytics_routes
from feedbackhub.routes.admin import admin_auth, admin_feedback, admin_websites, admin_users


api_router = APIRouter()

# Public API (x-api-key)
api_router.include_router(website_routes.router)
api_router.include_router(feedback_routes.router)
api_router.include_router(vote_routes.router)
api_router.include_router(comment_routes.router)
api_router.include_router(category_routes.router)
api_router.include_router(analytics_routes.router)

# Admin API (session cookie)
api_router.include_router(admin_auth.router)
api_router.include_router(admin_feedback.router)
api_router.include_router(admin_websites.router)
api_router.include_router(admin_users.router)
