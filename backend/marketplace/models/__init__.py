from .auth import User, SessionToken, PasswordResetToken
from .security import SecurityEvent
from .listings import Franchise, Business, Advertisement, LISTING_STATUSES, PAYMENT_STATUSES
from .inquiries import Inquiry, INQUIRY_STATUSES

__all__ = [
    'User', 'SessionToken', 'PasswordResetToken',
    'SecurityEvent',
    'Franchise', 'Business', 'Advertisement',
    'Inquiry',
    'LISTING_STATUSES', 'PAYMENT_STATUSES', 'INQUIRY_STATUSES',
]
