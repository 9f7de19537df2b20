# Import every model here so Alembic can discover them.

from app.models.admin_user import AdminUser  # noqa: F401
from app.models.lead import Lead  # noqa: F401
from app.models.booking import CarwashBooking  # noqa: F401
from app.models.customer import Customer, CustomerVehicle  # noqa: F401
from app.models.store import GarageHubTag, Store, StoreTaskCapacity  # noqa: F401
from app.models.task_type import TaskType  # noqa: F401
