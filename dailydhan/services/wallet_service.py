from dailydhan.database.wallet_dao import WalletDAO
from dailydhan.models.wallet import Wallet
from dailydhan.utils.constants import WALLET_TYPES, BANK_WALLET_TYPES


class WalletService:
    def __init__(self, wallet_dao: WalletDAO):
        self._dao = wallet_dao

    def get_all(self) -> list[Wallet]:
        return self._dao.get_all()

    def get_by_id(self, wallet_id: int) -> Wallet | None:
        return self._dao.get_by_id(wallet_id)

    def create(
        self,
        name: str,
        wallet_type: str = "cash",
        bank_name: str | None = None,
        last_4_digits: str | None = None,
    ) -> Wallet:
        name, bank_name, last_4_digits = self._clean(name, wallet_type, bank_name, last_4_digits)
        return self._dao.create(name, wallet_type, bank_name, last_4_digits)

    def update(
        self,
        wallet_id: int,
        name: str,
        wallet_type: str = "cash",
        bank_name: str | None = None,
        last_4_digits: str | None = None,
    ) -> Wallet:
        if self._dao.get_by_id(wallet_id) is None:
            raise ValueError("Wallet not found.")
        name, bank_name, last_4_digits = self._clean(name, wallet_type, bank_name, last_4_digits)
        return self._dao.update(wallet_id, name, wallet_type, bank_name, last_4_digits)

    def delete(self, wallet_id: int):
        wallet = self._dao.get_by_id(wallet_id)
        if wallet is None:
            raise ValueError("Wallet not found.")
        in_use = self._dao.count_references(wallet_id)
        if in_use:
            raise ValueError(
                f"Wallet '{wallet.name}' is in use by {in_use} transaction(s) "
                "or recurring transaction(s) and cannot be deleted."
            )
        self._dao.delete(wallet_id)

    def get_or_create_by_name(self, name: str) -> Wallet:
        """Look a wallet up by its exact name, creating a cash wallet if absent."""
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a wallet name.")
        return self._dao.get_by_name(name) or self._dao.create(name)

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _clean(name, wallet_type, bank_name, last_4_digits):
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a wallet name.")
        if wallet_type not in WALLET_TYPES:
            raise ValueError(
                f"Invalid wallet type '{wallet_type}'. "
                f"Must be one of: {', '.join(WALLET_TYPES)}."
            )
        bank_name = (bank_name or "").strip() or None
        last_4_digits = (last_4_digits or "").strip() or None
        if wallet_type not in BANK_WALLET_TYPES:
            bank_name = None
        if wallet_type != "credit_card":
            last_4_digits = None
        elif last_4_digits and not (len(last_4_digits) == 4 and last_4_digits.isdigit()):
            raise ValueError("Last 4 digits must be exactly four numbers.")
        return name, bank_name, last_4_digits
