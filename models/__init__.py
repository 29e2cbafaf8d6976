from models.course import Course
from models.lecturer import Lecturer
from models.room import Room
from models.class_name import ClassName
from models.schedule_item import ScheduleItem
from models.teaching_log import TeachingLog
from models.setting import AppSetting
from models.dataset import Dataset, Mutation

__all__ = [
    "Course",
    "Lecturer",
    "Room",
    "ClassName",
    "ScheduleItem",
    "TeachingLog",
    "AppSetting",
    "Dataset",
    "Mutation",
]
