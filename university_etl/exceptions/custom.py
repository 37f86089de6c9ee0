from pathlib import Path


class UniversitiesAPIError(Exception):
    def __init__(self, message: str, country: str, status_code: int | None = None):
        self.message = message
        self.country = country
        self.status_code = status_code
        super().__init__(message)


class StagingError(Exception):
    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(message)


class DataNotFoundError(Exception):
    def __init__(self, artifact: str):
        self.artifact = artifact
        self.message = f"{artifact} file not found. Please run the ETL process first."
        super().__init__(self.message)
