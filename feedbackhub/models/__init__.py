from .website.website_model import Website
from .category.category_model import Category
from .feedback.feedback_model import FeedbackItem, FeedbackType, FeedbackStatus, FeedbackPriority
from .feedback.vote_model import Vote, VoteType
from .feedback.comment_model import Comment
from .analytics.analytics_event import AnalyticsEvent
from .admin.admin_user import AdminUser, AdminRole
