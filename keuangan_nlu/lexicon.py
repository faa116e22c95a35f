"""
Kamus tetap untuk pipeline ekstraksi transaksi.

Semua tabel di sini adalah data berversi yang dimuat sekali saat proses
mulai. Urutan entri bermakna: pencocokan fuzzy kategori dan inferensi
kategori dari merchant memakai urutan iterasi untuk memutus seri.
"""

from types import MappingProxyType

LEXICON_VERSION = "2024.12"

FALLBACK_CATEGORY = "lainnya"

# Kategori kanonik -> sinonim. Nama kanonik juga berlaku sebagai sinonim.
CATEGORY_SYNONYMS: dict[str, tuple[str, ...]] = {
    "makanan": (
        "makanan", "makan", "minum", "food", "snack", "sarapan",
        "mcd", "kfc", "resto", "kopi", "jajan",
    ),
    "transportasi": (
        "transportasi", "transport", "bensin", "bbm", "grab", "gojek",
        "taxi", "tol", "parkir", "busway", "ojek",
    ),
    "komunikasi": (
        "komunikasi", "pulsa", "internet", "data", "wifi", "telepon", "kuota",
    ),
    "utilitas": (
        "utilitas", "listrik", "air", "pln", "pdam", "gas", "sampah", "maintenance",
    ),
    "shopping": (
        "shopping", "belanja", "baju", "sepatu", "tas", "aksesoris", "mall",
    ),
    "kesehatan": (
        "kesehatan", "obat", "dokter", "apotek", "klinik",
    ),
    "hiburan": (
        "hiburan", "nonton", "bioskop", "game", "netflix",
    ),
    "pendidikan": (
        "pendidikan", "buku", "kursus", "sekolah",
    ),
    "pendapatan": (
        "pendapatan", "gaji", "salary", "bonus", "freelance", "proyek",
        "investasi", "dividen", "bunga",
    ),
}


def _flatten_synonyms(table: dict[str, tuple[str, ...]]) -> dict[str, str]:
    flat: dict[str, str] = {}
    for canonical, synonyms in table.items():
        for synonym in synonyms:
            flat.setdefault(synonym, canonical)
    return flat


# Sinonim -> kategori kanonik, urut sesuai CATEGORY_SYNONYMS
SYNONYM_TABLE = MappingProxyType(_flatten_synonyms(CATEGORY_SYNONYMS))

# Pola nama merchant -> kategori, dicek berurutan, pola pertama yang cocok menang
MERCHANT_CATEGORY_PATTERNS: tuple[tuple[str, str], ...] = (
    (
        r"\b(?:resto|restoran|restaurant|warung|warteg|rumah makan|kedai|cafe|kafe|"
        r"coffee|kopi|bakery|mcd|mcdonald'?s?|kfc|burger|pizza|hokben|solaria|starbucks)\b",
        "makanan",
    ),
    (
        r"\b(?:grab|gojek|go-jek|parkir|parking|pertamina|spbu|shell|tol|taxi|taksi|"
        r"bluebird|transjakarta|kai)\b",
        "transportasi",
    ),
    (r"\b(?:telkomsel|indosat|smartfren|xl|axis|tri|indihome)\b", "komunikasi"),
    (r"\b(?:pln|pdam|pgn|listrik)\b", "utilitas"),
    (r"\b(?:apotek|apotik|kimia farma|klinik|rumah sakit|guardian|watsons)\b", "kesehatan"),
    (
        r"\b(?:indomaret|alfamart|alfamidi|supermarket|hypermart|carrefour|transmart|"
        r"superindo|mall|toko|tokopedia|shopee|lazada)\b",
        "shopping",
    ),
)

# Angka dasar dalam bentuk kata
DIGIT_WORDS = MappingProxyType({
    "nol": 0, "satu": 1, "dua": 2, "tiga": 3, "empat": 4, "lima": 5,
    "enam": 6, "tujuh": 7, "delapan": 8, "sembilan": 9,
    "sepuluh": 10, "sebelas": 11,
    "duabelas": 12, "tigabelas": 13, "empatbelas": 14, "limabelas": 15,
    "enambelas": 16, "tujuhbelas": 17, "delapanbelas": 18, "sembilanbelas": 19,
    "duapuluh": 20, "tigapuluh": 30, "empatpuluh": 40, "limapuluh": 50,
    "enampuluh": 60, "tujuhpuluh": 70, "delapanpuluh": 80, "sembilanpuluh": 90,
})

# Pengali di dalam satu kelompok ratusan
GROUP_WORDS = MappingProxyType({
    "puluh": 10,
    "belas": 10,
    "ratus": 100,
    "seratus": 100,
})

# Pengali >= 1000. Bentuk "se-" bernilai satu kali pengali.
SCALE_WORDS = MappingProxyType({
    "ribu": 1_000,
    "seribu": 1_000,
    "juta": 1_000_000,
    "sejuta": 1_000_000,
    "milyar": 1_000_000_000,
    "miliar": 1_000_000_000,
})

NUMBER_WORDS = frozenset(DIGIT_WORDS) | frozenset(GROUP_WORDS) | frozenset(SCALE_WORDS)

# Sufiks angka singkat
SHORTHAND_MULTIPLIERS = MappingProxyType({
    "k": 1_000,
    "m": 1_000_000,
    "b": 1_000_000_000,
    "rb": 1_000,
    "jt": 1_000_000,
    "ribu": 1_000,
    "juta": 1_000_000,
    "milyar": 1_000_000_000,
    "miliar": 1_000_000_000,
})

# Kata kerja pembuka kalimat transaksi
EXPENSE_VERBS = frozenset({"bayar", "beli", "keluar"})
INCOME_VERBS = frozenset({"terima", "dapat", "masuk"})
NEUTRAL_VERBS = frozenset({"catat"})
TRANSACTION_VERBS = EXPENSE_VERBS | INCOME_VERBS | NEUTRAL_VERBS

EXPENSE_FLOW_WORDS = frozenset({"pengeluaran"})
INCOME_FLOW_WORDS = frozenset({"pemasukan"})

# Kata arah sebelum kategori
EXPENSE_DIRECTIONS = frozenset({"untuk", "buat"})
INCOME_DIRECTIONS = frozenset({"dari"})
DIRECTION_WORDS = EXPENSE_DIRECTIONS | INCOME_DIRECTIONS

SHORTHAND_EXPENSE_PREFIXES = frozenset({"p", "k"})
SHORTHAND_INCOME_PREFIXES = frozenset({"m", "i"})

# Kata yang tidak pernah dianggap sebagai kategori
NON_CATEGORY_WORDS = (
    TRANSACTION_VERBS
    | EXPENSE_FLOW_WORDS
    | INCOME_FLOW_WORDS
    | DIRECTION_WORDS
    | frozenset({"rp", "idr", "uang", "sebesar", "dan", "hari", "ini", "kemarin", "besok"})
)

MAINTENANCE_PHRASES = MappingProxyType({
    "edit transaksi terakhir": "edit.last",
    "ubah transaksi terakhir": "edit.last",
    "hapus transaksi terakhir": "delete.last",
})

MULTI_CONJUNCTION = " dan "

RELATIVE_DAYS = MappingProxyType({
    "hari ini": 0,
    "kemarin": -1,
    "besok": 1,
})

MONTHS = MappingProxyType({
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "mei": 5, "may": 5,
    "jun": 6, "jul": 7, "agu": 8, "ags": 8, "aug": 8, "sep": 9,
    "okt": 10, "oct": 10, "nov": 11, "des": 12, "dec": 12,
})

# Contoh ucapan untuk melatih scorer statistik
TRAINING_UTTERANCES: tuple[tuple[str, str], ...] = (
    ("catat pengeluaran 50000 untuk makan", "expense.single"),
    ("catat pengeluaran 25rb buat bensin", "expense.single"),
    ("keluar 20000 buat parkir", "expense.single"),
    ("bayar 150000 untuk listrik", "expense.single"),
    ("bayar pulsa 50k", "expense.single"),
    ("beli kopi 25000", "expense.single"),
    ("beli baju 200rb", "expense.single"),
    ("p50k makan", "expense.single"),
    ("k20k transport", "expense.single"),
    ("30000 untuk transport", "expense.single"),
    ("15000 buat jajan", "expense.single"),
    ("catat pemasukan 5000000 dari gaji", "income.single"),
    ("terima uang 1jt dari bonus", "income.single"),
    ("dapat 500000 dari freelance", "income.single"),
    ("masuk 2jt dari proyek", "income.single"),
    ("m5m gaji", "income.single"),
    ("i200k bonus", "income.single"),
    ("edit transaksi terakhir", "edit.last"),
    ("ubah transaksi terakhir", "edit.last"),
    ("hapus transaksi terakhir", "delete.last"),
    ("lihat transaksi", "query.unrecognized"),
    ("riwayat transaksi", "query.unrecognized"),
    ("transaksi bulan ini", "query.unrecognized"),
    ("lihat budget", "query.unrecognized"),
    ("sisa budget", "query.unrecognized"),
    ("laporan keuangan", "query.unrecognized"),
    ("laporan bulanan", "query.unrecognized"),
    ("analisa pengeluaran", "query.unrecognized"),
    ("bantuan", "query.unrecognized"),
    ("cara pakai", "query.unrecognized"),
    ("menu", "query.unrecognized"),
    ("status", "query.unrecognized"),
    ("halo", "query.unrecognized"),
    ("terima kasih", "query.unrecognized"),
)
