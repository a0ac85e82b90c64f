from pydantic import BaseModel
from typing import List

from .order import Order


class DashboardStats(BaseModel):
    total_artworks: int
    total_orders: int
    pending_orders: int
    total_categories: int
    total_artists: int
    total_feedback: int
    recent_orders: List[Order]
