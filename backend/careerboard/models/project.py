from sqlalchemy import Boolean, Column, Integer, Text
from careerboard.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    client_name = Column(Text)
    short_description = Column(Text)
    description = Column(Text)
    project_url = Column(Text)
    status = Column(Text, nullable=False, default="planning")
    featured = Column(Boolean, nullable=False, default=False)
    views_count = Column(Integer, nullable=False, default=0)
    budget = Column(Integer)
    start_date = Column(Text)
    end_date = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
