from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.db.base_class import Base

class Artwork(Base):
    # __tablename__ will be 'artworks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    medium = Column(String(100), nullable=True)
    dimensions = Column(String(100), nullable=True)
    year = Column(String(10), nullable=True)
    price = Column(String(50), nullable=False)  # Display string ("₹1,200", "On request"), not a number

    # Ordered list of {"url", "label", "public_id"}; order is upload order
    photos = Column(JSON, nullable=False)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    category = relationship("Category", back_populates="artworks", lazy="joined")
    artist = relationship("Artist", back_populates="artworks", lazy="joined")

    def __repr__(self):
        return f"<Artwork(id={self.id}, title='{self.title}')>"
