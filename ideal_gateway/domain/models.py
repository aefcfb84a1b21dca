"""Domain models - pure Python dataclasses representing iDEAL entities"""

from dataclasses import dataclass, field
from typing import List, Optional

from ideal_gateway.domain.status import TransactionStatus


@dataclass(frozen=True)
class ClientConfig:
    """Static identifiers and endpoint used for every request"""

    partner_id: int
    testmode: bool = False
    profile_key: str = ""  # Empty means omitted from requests
    base_url: str = "https://secure.mollie.nl/xml/ideal"


@dataclass(frozen=True)
class Bank:
    """Issuing bank the end user can pay with"""

    bank_id: int
    name: str


BankList = List[Bank]


@dataclass(frozen=True)
class TransactionRequest:
    """Parameters for creating a new transaction"""

    amount: int  # Smallest currency unit (cents)
    bank_id: int
    description: str
    report_url: str  # Server-to-server status callback
    return_url: str  # Browser redirect after payment


@dataclass(frozen=True)
class Consumer:
    """Payer details, only known once the payment completed"""

    name: Optional[str] = None
    account: Optional[str] = None
    city: Optional[str] = None


@dataclass(frozen=True)
class TransactionResult:
    """Snapshot of one transaction as decoded from a single response"""

    transaction_id: str
    amount: int
    currency: str
    paid: bool
    status: TransactionStatus
    raw_status: str = ""
    message: str = ""
    consumer: Consumer = field(default_factory=Consumer)
    redirect_url: Optional[str] = None  # Only set on the fetch response

    def is_success(self) -> bool:
        return self.status is TransactionStatus.SUCCESS

    def is_checked_before(self) -> bool:
        return self.status is TransactionStatus.CHECKED_BEFORE

    def is_failure(self) -> bool:
        return self.status is TransactionStatus.FAILURE

    def is_expired(self) -> bool:
        return self.status is TransactionStatus.EXPIRED

    def is_cancelled(self) -> bool:
        return self.status is TransactionStatus.CANCELLED
