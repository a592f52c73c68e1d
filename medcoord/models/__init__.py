# medcoord/models/__init__.py
# импорт всех моделей, чтобы Base.metadata (и Alembic) их видел
from .users import User, AuthSession
from .resources import Resource
from .stocks import Stock, StockHistory
from .requests import ResourceRequest
from .alerts import Alert
from .notifications import Notification
from .audit_log import AuditLog
from .distribution_plan import DistributionPlan
