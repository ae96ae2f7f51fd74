# Guardião — Database Models
# Import all models here for SQLAlchemy discovery

from guardiao.models.access_log import AccessLog                    # noqa
from guardiao.models.occurrence import Occurrence, TimelineEntry    # noqa
from guardiao.models.suggestion import Suggestion                   # noqa
from guardiao.models.parking_request import ParkingRequest          # noqa
from guardiao.models.mission_order import MissionOrder              # noqa
