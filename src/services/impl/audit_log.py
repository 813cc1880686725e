"""관리자 작업 감사 로그"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from src.core.logging import logger


@dataclass
class AdminAuditRecord:
    admin_id: Optional[str]
    action: str  # UPDATE, BULK_UPDATE, CANCEL, REFUND
    resource_type: str
    resource_ids: List[str]
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.utcnow)


class AdminAuditLog:
    """감사 기록을 [AdminAudit] 로거로 남깁니다.

    records에는 프로세스 수명 동안의 최근 기록이 보관됩니다 (테스트/디버깅용).
    """

    def __init__(self, max_records: int = 500):
        self.max_records = max_records
        self.records: List[AdminAuditRecord] = []

    def record(
        self,
        admin_id: Optional[str],
        action: str,
        resource_type: str,
        resource_ids: Sequence[str],
        details: Optional[Dict[str, Any]] = None,
    ) -> AdminAuditRecord:
        entry = AdminAuditRecord(
            admin_id=admin_id,
            action=action,
            resource_type=resource_type,
            resource_ids=list(resource_ids),
            details=details or {},
        )
        self.records.append(entry)
        if len(self.records) > self.max_records:
            del self.records[: len(self.records) - self.max_records]

        logger.info(
            f"[AdminAudit] admin={admin_id or 'unknown'} action={action} "
            f"{resource_type}={','.join(entry.resource_ids)} details={entry.details}"
        )
        return entry
