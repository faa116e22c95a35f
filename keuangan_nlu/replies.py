"""Teks balasan berbahasa Indonesia untuk hasil pipeline."""

from .models import (
    MaintenanceKind,
    PipelineResult,
    RejectionReason,
    TransactionCandidate,
    TransactionType,
)

HELP_HINT = 'Ketik "bantuan" untuk melihat panduan penggunaan.'

REJECTION_MESSAGES = {
    RejectionReason.MISSING_AMOUNT: "Maaf, nominal transaksi tidak ditemukan. Contoh: catat pengeluaran 50000 untuk makan.",
    RejectionReason.MISSING_CATEGORY: "Maaf, kategori transaksi tidak ditemukan. Contoh: catat pengeluaran 50000 untuk makan.",
    RejectionReason.AMBIGUOUS_SPLIT: "Terjadi kesalahan dalam memproses transaksi ganda.",
    RejectionReason.UNRECOGNIZED: f"Maaf, saya tidak mengerti permintaan Anda. {HELP_HINT}",
}

MAINTENANCE_MESSAGES = {
    MaintenanceKind.EDIT: "Silakan masukkan detail baru untuk transaksi terakhir.",
    MaintenanceKind.DELETE: "Transaksi terakhir telah dihapus.",
}


def format_currency(amount: float, currency: str = "IDR") -> str:
    prefix = "Rp" if currency.upper() == "IDR" else f"{currency.upper()} "
    formatted = f"{float(amount):,.0f}".replace(",", ".")
    return f"{prefix}{formatted}"


def _describe(candidate: TransactionCandidate) -> str:
    amount = format_currency(candidate.amount)
    if candidate.type == TransactionType.INCOME:
        return f"Pemasukan sebesar {amount} dari {candidate.category}"
    return f"Pengeluaran sebesar {amount} untuk {candidate.category}"


def render_reply(result: PipelineResult) -> str:
    """
    Render hasil pipeline menjadi pesan balasan.

    Satu kandidat -> satu kalimat konfirmasi; beberapa kandidat -> satu baris
    per transaksi diikuti penutup.
    """
    if result.maintenance is not None:
        return MAINTENANCE_MESSAGES[result.maintenance.kind]

    if len(result.candidates) == 1:
        return f"{_describe(result.candidates[0])} telah dicatat."

    if result.candidates:
        lines = [_describe(candidate) for candidate in result.candidates]
        lines.append("Semua transaksi telah dicatat.")
        return "\n".join(lines)

    reason = result.rejection.reason if result.rejection else RejectionReason.UNRECOGNIZED
    return REJECTION_MESSAGES[reason]
