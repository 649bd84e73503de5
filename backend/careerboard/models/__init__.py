from careerboard.models.taxonomy import CareerCategory, CareerLocation, CareerType, CareerLevel
from careerboard.models.position import CareerPosition
from careerboard.models.application import CareerApplication, ApplicationActivity
from careerboard.models.project import Project
from careerboard.models.post import Post

__all__ = [
    "CareerCategory", "CareerLocation", "CareerType", "CareerLevel",
    "CareerPosition", "CareerApplication", "ApplicationActivity", "Project", "Post",
]
