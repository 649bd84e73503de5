from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from careerboard.database import Base


class CareerApplication(Base):
    __tablename__ = "career_applications"

    id = Column(Text, primary_key=True)
    position_id = Column(Text, ForeignKey("career_positions.id", ondelete="SET NULL"))
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    linkedin_url = Column(Text)
    portfolio_url = Column(Text)
    github_url = Column(Text)
    cover_letter = Column(Text)
    resume_url = Column(Text)
    status = Column(Text, nullable=False, default="submitted")
    notes = Column(Text)
    source = Column(Text)
    applied_at = Column(Text, nullable=False)
    last_activity_at = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    position = relationship("CareerPosition", back_populates="applications")
    activities = relationship(
        "ApplicationActivity", back_populates="application", cascade="all, delete-orphan"
    )


class ApplicationActivity(Base):
    __tablename__ = "career_application_activities"

    id = Column(Text, primary_key=True)
    application_id = Column(
        Text, ForeignKey("career_applications.id", ondelete="CASCADE"), nullable=False
    )
    activity_type = Column(Text, nullable=False)
    old_status = Column(Text)
    new_status = Column(Text)
    description = Column(Text)
    notes = Column(Text)
    created_at = Column(Text, nullable=False)

    application = relationship("CareerApplication", back_populates="activities")
