from .bank import BankSource, DirectoryBankClient, HttpBankClient
from .config import settings
from .store import SessionStore


def create_bank_source() -> BankSource:
    if settings.BANK_API_URL:
        return HttpBankClient(settings.BANK_API_URL, settings.BANK_TIMEOUT_SECONDS)
    return DirectoryBankClient(settings.BANK_DIR)


bank_source = create_bank_source()
session_store = SessionStore()
