from .credential_store import CacheStatus, CredentialStore
from .csv_storage import CsvBarWriter, bars_to_dataframe

__all__ = ["CacheStatus", "CredentialStore", "CsvBarWriter", "bars_to_dataframe"]
