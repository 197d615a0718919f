from enum import Enum

# Enums
class CategoryStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
