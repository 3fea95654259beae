'''
Static enums mirroring the enum columns of the database schema.
'''
import enum


class ListableEnum(str, enum.Enum):
    """A str Enum that can list all of its values."""
    @classmethod
    def get_all_names(cls) -> list[str]:
        return [member.value for member in cls]


class UserRole(ListableEnum):
    ADMIN = 'Admin'
    TEACHER = 'Teacher'
    MENTOR = 'Mentor'


class TeacherStatusEnum(ListableEnum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'


class SaleStatusEnum(ListableEnum):
    COMPLETED = 'completed'
    PENDING = 'pending'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'


class BatchStatusEnum(ListableEnum):
    """Derived at read time, never stored."""
    UPCOMING = 'upcoming'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'


class WeekdayEnum(ListableEnum):
    MONDAY = 'Monday'
    TUESDAY = 'Tuesday'
    WEDNESDAY = 'Wednesday'
    THURSDAY = 'Thursday'
    FRIDAY = 'Friday'
    SATURDAY = 'Saturday'
    SUNDAY = 'Sunday'
