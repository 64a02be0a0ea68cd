from fastapi import Depends
from sqlalchemy.orm import Session

from portal.core.config.settings import Settings
from portal.db.session import get_db
from portal.dependencies.auth import get_app_settings
from portal.services.submissions import SubmissionLifecycle


def get_lifecycle(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SubmissionLifecycle:
    return SubmissionLifecycle(db, settings)
