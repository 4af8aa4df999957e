import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

LOAD_POLICIES = ("skip", "abort")


@dataclass
class Settings:
    # Data files
    book_file: str = os.getenv("LIBRARY_BOOK_FILE", "bookData.txt")
    student_file: str = os.getenv("LIBRARY_STUDENT_FILE", "studentData.txt")
    delimiter: str = os.getenv("LIBRARY_DELIMITER", ",")

    # What to do with a malformed data-file line: "skip" logs and continues, "abort" stops the load
    load_error_policy: str = os.getenv("LIBRARY_LOAD_POLICY", "skip").lower()

    # Catalog index
    bucket_count: int = int(os.getenv("LIBRARY_BUCKET_COUNT", "17"))

    # Application
    app_name: str = os.getenv("APP_NAME", "Library Catalog")
    log_level: str = os.getenv("LIBRARY_LOG_LEVEL", "WARNING").upper()

    def __post_init__(self) -> None:
        if self.load_error_policy not in LOAD_POLICIES:
            raise ValueError(f"load_error_policy must be one of {', '.join(LOAD_POLICIES)}, got {self.load_error_policy!r}")
        if self.bucket_count < 1:
            raise ValueError("bucket_count must be at least 1.")
        if len(self.delimiter) != 1:
            raise ValueError("delimiter must be a single character.")


settings = Settings()
