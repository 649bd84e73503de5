from sqlalchemy import Boolean, Column, Integer, Text
from sqlalchemy.orm import relationship
from careerboard.database import Base


class TaxonomyMixin:
    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)


class CareerCategory(TaxonomyMixin, Base):
    __tablename__ = "career_categories"

    description = Column(Text)
    icon = Column(Text)
    color = Column(Text)

    positions = relationship("CareerPosition", back_populates="category")


class CareerLocation(TaxonomyMixin, Base):
    __tablename__ = "career_locations"

    city = Column(Text)
    country = Column(Text)
    is_remote = Column(Boolean, nullable=False, default=False)

    positions = relationship("CareerPosition", back_populates="location")


class CareerType(TaxonomyMixin, Base):
    __tablename__ = "career_types"

    description = Column(Text)

    positions = relationship("CareerPosition", back_populates="type")


class CareerLevel(TaxonomyMixin, Base):
    __tablename__ = "career_levels"

    description = Column(Text)
    years_min = Column(Integer, nullable=False, default=0)
    years_max = Column(Integer)

    positions = relationship("CareerPosition", back_populates="level")
