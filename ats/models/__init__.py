from .tenant import Tenant
from .user import User
from .membership import TenantMembership
from .job import Job
from .candidate import Candidate
from .application import Application
from .interview import Interview
from .note import Note
from .tag import Tag
from .email_template import EmailTemplate
from .activity_log import ActivityLog
from .scoring_event import ScoringEvent
# base and mixins are imported by the above as needed
