from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from careerboard.database import Base


class CareerPosition(Base):
    __tablename__ = "career_positions"

    id = Column(Text, primary_key=True)
    category_id = Column(Text, ForeignKey("career_categories.id", ondelete="SET NULL"))
    location_id = Column(Text, ForeignKey("career_locations.id", ondelete="SET NULL"))
    type_id = Column(Text, ForeignKey("career_types.id", ondelete="SET NULL"))
    level_id = Column(Text, ForeignKey("career_levels.id", ondelete="SET NULL"))
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    summary = Column(Text)
    description = Column(Text, nullable=False, default="")
    requirements = Column(Text)
    benefits = Column(Text)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_currency = Column(Text, nullable=False, default="USD")
    salary_type = Column(Text, nullable=False, default="yearly")
    application_deadline = Column(Text)
    remote_allowed = Column(Boolean, nullable=False, default=False)
    featured = Column(Boolean, nullable=False, default=False)
    urgent = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default="draft")
    views_count = Column(Integer, nullable=False, default=0)
    applications_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    published_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    category = relationship("CareerCategory", back_populates="positions")
    location = relationship("CareerLocation", back_populates="positions")
    type = relationship("CareerType", back_populates="positions")
    level = relationship("CareerLevel", back_populates="positions")
    applications = relationship("CareerApplication", back_populates="position")
