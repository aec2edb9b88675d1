"""
Read-Optimized View Models

Projections returned by administrative reads.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TableInfo(BaseModel):
    """
    Summary of a DescribeTable response.
    """

    name: str = Field(..., description="Table name")
    status: str = Field(..., description="Table status (CREATING, ACTIVE, UPDATING, DELETING, ...)")
    item_count: Optional[int] = Field(None, description="Approximate item count")
    size_bytes: Optional[int] = Field(None, description="Approximate table size in bytes")
    creation_date: Optional[datetime] = Field(None, description="Table creation time")
    billing_mode: Optional[str] = Field(None, description="PROVISIONED or PAY_PER_REQUEST")
    read_capacity: Optional[int] = Field(None, description="Provisioned read capacity units")
    write_capacity: Optional[int] = Field(None, description="Provisioned write capacity units")

    @property
    def is_active(self) -> bool:
        return self.status == 'ACTIVE'

    @classmethod
    def from_description(cls, table: Dict[str, Any]) -> 'TableInfo':
        """Build from the ``Table`` element of a DescribeTable response."""
        throughput = table.get('ProvisionedThroughput') or {}
        billing = table.get('BillingModeSummary') or {}
        return cls(
            name=table['TableName'],
            status=table['TableStatus'],
            item_count=table.get('ItemCount'),
            size_bytes=table.get('TableSizeBytes'),
            creation_date=table.get('CreationDateTime'),
            # Tables created as PROVISIONED may not report a BillingModeSummary
            billing_mode=billing.get('BillingMode', 'PROVISIONED' if throughput else None),
            read_capacity=throughput.get('ReadCapacityUnits'),
            write_capacity=throughput.get('WriteCapacityUnits'),
        )
