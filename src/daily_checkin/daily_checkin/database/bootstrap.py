from __future__ import annotations

import logging

import mysql.connector

from .connection import db_config_from_dict

logger = logging.getLogger(__name__)

CHECKIN_RECORDS_DDL = """
CREATE TABLE IF NOT EXISTS checkin_records (
    record_id INT AUTO_INCREMENT PRIMARY KEY,
    person_name VARCHAR(100) NOT NULL,
    checkin_date DATE NOT NULL,
    evidence_location VARCHAR(500) NULL,
    recorded_at DATETIME NOT NULL,
    UNIQUE KEY uq_checkin_person_date (person_name, checkin_date)
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


def ensure_database_exists(db_config: dict) -> None:
    target = db_config_from_dict(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict) -> None:
    """Create the check-in table if it is missing (idempotent)."""
    target = db_config_from_dict(db_config)
    ensure_database_exists(db_config)

    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(CHECKIN_RECORDS_DDL)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema ready on %s@%s/%s", target.user, target.host, target.database)
