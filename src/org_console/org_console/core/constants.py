"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GAS_TIMEOUT_SECONDS = 15
DEFAULT_EVENTS_CACHE_SECONDS = 2 * 60
DEFAULT_MEMBERS_CACHE_SECONDS = 5 * 60
REMEMBER_ME_DAYS = 7

DEFAULT_GEOFENCE_RADIUS = 100
DEFAULT_EVENTS_LIMIT = 10
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_MEMBERS_LIMIT = 50
DASHBOARD_MEMBERS_LIMIT = 500

MAX_ANNOUNCEMENT_IMAGES = 5
MAX_ANNOUNCEMENT_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png")

ANNOUNCEMENT_CATEGORIES = ("Events", "Training", "Updates", "Programs", "Other")

# Dashboard committee filter options, in display order.
COMMITTEE_ALL = "All"
COMMITTEE_EXECUTIVE = "Executive Board (only heads/Officers)"
COMMITTEE_MEMBERS = "Only Members"
COMMITTEE_VOLUNTEERS = "Only Volunteers"
COMMITTEES = (
    COMMITTEE_ALL,
    COMMITTEE_EXECUTIVE,
    COMMITTEE_MEMBERS,
    COMMITTEE_VOLUNTEERS,
    "Membership and Internal Affairs Committee",
    "External Relations Committee",
    "Secretariat and Documentation Committee",
    "Finance and Treasury Committee",
    "Program Development Committee",
    "Communications and Marketing Committee",
)
EXECUTIVE_POSITION_KEYWORDS = ("head", "officer", "president", "vice", "secretary", "treasurer")

# Chart colours per attendance bucket (hex, as shown on the dashboard).
STATUS_COLORS = {
    "Present": "#10b981",
    "Late": "#f59e0b",
    "Excused": "#3b82f6",
    "Absent": "#ef4444",
}
