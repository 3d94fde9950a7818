"""Receipt formatting utilities."""

from .models import EWalletProvider, Transaction
from .payloads import CASH, QRIS, TRANSFER

WIDTH = 40

PAYMENT_LABELS = {
    CASH: "Tunai",
    TRANSFER: "Transfer Bank",
    QRIS: "QRIS",
    EWalletProvider.GOPAY.channel: "GoPay",
    EWalletProvider.OVO.channel: "OVO",
    EWalletProvider.DANA.channel: "DANA",
    EWalletProvider.SHOPEEPAY.channel: "ShopeePay",
}


def format_rupiah(amount: int) -> str:
    """``12500`` -> ``Rp 12.500``; negatives keep their sign in front."""
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")


def payment_label(channel: str) -> str:
    return PAYMENT_LABELS.get(channel, channel)


def format_receipt(transaction: Transaction, store_name: str = "") -> str:
    """Format a human-readable receipt."""
    lines = []

    lines.append("=" * WIDTH)
    if store_name:
        lines.append(store_name.center(WIDTH).rstrip())
    title = "NOTA CEPAT" if transaction.is_manual else "NOTA"
    lines.append(title.center(WIDTH).rstrip())
    lines.append("=" * WIDTH)
    lines.append(f"No: {transaction.id}")
    lines.append(f"Tanggal: {transaction.created_at:%d/%m/%Y %H:%M}")
    lines.append("-" * WIDTH)

    for item in transaction.items:
        lines.append(item.product.name)
        lines.append(
            f"  {item.quantity} x {format_rupiah(item.effective_price)} = {format_rupiah(item.line_total)}"
        )

    lines.append("-" * WIDTH)
    lines.append(f"Jumlah barang: {transaction.item_count}")
    lines.append(f"Subtotal: {format_rupiah(transaction.subtotal)}")

    if transaction.discount > 0:
        lines.append(f"Diskon: -{format_rupiah(transaction.discount)}")

    lines.append(f"TOTAL: {format_rupiah(transaction.total)}")
    lines.append(f"Bayar: {payment_label(transaction.payment_method)}")

    if transaction.payment_method == TRANSFER and transaction.payment_payload:
        lines.append("-" * WIDTH)
        lines.extend(transaction.payment_payload.splitlines())

    lines.append("=" * WIDTH)
    lines.append("Terima kasih!".center(WIDTH).rstrip())
    lines.append("=" * WIDTH)

    return "\n".join(lines)
