"""Admin domain schemas"""

from ...schemas import CamelModel


class SalonApprovalUpdate(CamelModel):
    is_approved: bool
