from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .email_service import (
    LoggingEmailService,
    SmtpEmailService,
    create_email_service,
)
from .speedy_service import SpeedyAddressService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "LoggingEmailService",
    "SmtpEmailService",
    "create_email_service",
    "SpeedyAddressService",
]
