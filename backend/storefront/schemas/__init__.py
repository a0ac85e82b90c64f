from .admin import LoginRequest, GoogleLoginRequest, ChangePasswordRequest, AdminOut, LoginResponse, VerifyResponse, MessageResponse, TokenPayload
from .category import Category, CategoryCreate, CategoryUpdate, CategoryWithCount
from .artwork import Artwork, ArtworkCreate, ArtworkUpdate, Photo
from .artist import Artist, ArtistCreate, ArtistUpdate, ArtistWithCount, ArtistDetail
from .order import Order, OrderCreate, OrderCreated, OrderStatusUpdate, OrderStats, OrderTypeEnum, OrderStatusEnum, RegularOrderCreate, CustomOrderCreate, BulkOrderCreate
from .feedback import Feedback, FeedbackCreate, FeedbackCreated, FeedbackStatusUpdate, FeedbackStats, FeedbackTypeEnum, FeedbackStatusEnum
from .dashboard import DashboardStats
