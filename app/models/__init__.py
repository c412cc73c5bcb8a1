# Fleet Admin: database models (local backend)
# Import all models here for SQLAlchemy discovery

from app.models.vehicle import Vehicle                 # noqa
from app.models.driver import Driver                   # noqa
from app.models.trip import Trip                       # noqa
from app.models.maintenance import MaintenanceRecord   # noqa
from app.models.user import User                       # noqa

# Backend table name → model
TABLES = {
    "vehicles": Vehicle,
    "drivers": Driver,
    "trips": Trip,
    "maintenance": MaintenanceRecord,
    "users": User,
}
