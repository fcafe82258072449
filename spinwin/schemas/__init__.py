# Schemas package (re-export feature modules for stable imports)
from .verification.verification import *
from .offers.offer import *
from .admin.admin import *
from .common.common import *
