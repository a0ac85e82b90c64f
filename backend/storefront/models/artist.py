from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.db.base_class import Base

class Artist(Base):
    # __tablename__ will be 'artists'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    location = Column(String(255), nullable=True)
    style = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)

    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    instagram = Column(String(255), nullable=True)
    facebook = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)

    profile_image_url = Column(String(1024), nullable=True)  # Cloudinary secure_url
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Deleting an artist detaches its artworks (artist_id -> NULL), it never deletes them
    artworks = relationship("Artwork", back_populates="artist", passive_deletes=True)

    def __repr__(self):
        return f"<Artist(id={self.id}, name='{self.name}')>"
