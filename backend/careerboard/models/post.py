from sqlalchemy import Boolean, Column, Integer, Text
from careerboard.database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    excerpt = Column(Text)
    content = Column(Text)
    category = Column(Text)
    author_name = Column(Text)
    status = Column(Text, nullable=False, default="draft")
    featured = Column(Boolean, nullable=False, default=False)
    views_count = Column(Integer, nullable=False, default=0)
    published_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
