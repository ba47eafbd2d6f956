# === constants.py: Programm-IDs, Konten-Größen und Übersetzungstabelle ===

from typing import Dict

from spl.token.constants import TOKEN_2022_PROGRAM_ID

# --- Programme ---
TOKEN_PROGRAM = TOKEN_2022_PROGRAM_ID

# --- Token-2022 Konten-Layout ---
MINT_SIZE = 82
ACCOUNT_SIZE = 165
MULTISIG_SIZE = 355
ACCOUNT_TYPE_SIZE = 1
TYPE_SIZE = 2
LENGTH_SIZE = 2
METADATA_POINTER_SIZE = 64

# Extension-Typen (Werte wie im Token-2022-Programm)
EXTENSION_METADATA_POINTER = 18
EXTENSION_SIZES = {
    EXTENSION_METADATA_POINTER: METADATA_POINTER_SIZE,
}

# Token-2022 Instruktionsnummern
METADATA_POINTER_EXTENSION_INSTRUCTION = 39
METADATA_POINTER_INITIALIZE = 0

U64_MAX = 2**64 - 1

# --- Token-Metadaten ---
METADATA_URI = "https://www.dsandev.in/api/token"
TOKEN_DESCRIPTION = "Only Possible On Solana"

# --- Formular ---
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_DECIMALS = 9
FORM_FIELDS = ("name", "symbol", "imageUrl", "initialSupply", "decimals")

# --- Explorer ---
EXPLORER_BASE_URL = "https://explorer.solana.com"

# --- Toasts ---
TOAST_DURATION_MS = 3000
MAX_VISIBLE_TOASTS = 2
CREATING_TOAST_ID = "creating-token"

DEFAULT_LANGUAGE = "de"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "app.title": "Solana Token Launchpad",
        "hero.title": "Launch Your Solana Token",
        "hero.description": "Create and deploy your custom token on the Solana blockchain in minutes!",
        "form.title": "Create Your Token (Devnet Only)",
        "form.name.label": "Token Name",
        "form.name.placeholder": "Enter token name",
        "form.name.tooltip": "The name of your token (max 32 characters)",
        "form.symbol.label": "Token Symbol",
        "form.symbol.placeholder": "Enter token symbol",
        "form.symbol.tooltip": "A short identifier for your token (max 10 uppercase characters)",
        "form.imageUrl.label": "Image URL",
        "form.imageUrl.placeholder": "Enter image URL",
        "form.imageUrl.tooltip": "A URL pointing to an image representing your token",
        "form.initialSupply.label": "Initial Supply",
        "form.initialSupply.placeholder": "Enter initial supply",
        "form.initialSupply.tooltip": "The initial number of tokens to mint",
        "form.decimals.label": "Decimals",
        "form.decimals.placeholder": "Enter number of decimals",
        "form.decimals.tooltip": "The number of decimal places for your token (0-9)",
        "form.submit": "Launch Token",
        "form.submitting": "Creating Token...",
        "validation.name.required": "Token name is required",
        "validation.name.tooLong": "Token name must be at most 32 characters",
        "validation.symbol.required": "Token symbol is required",
        "validation.symbol.tooLong": "Token symbol must be at most 10 characters",
        "validation.symbol.pattern": "Token symbol may only contain uppercase letters (A-Z)",
        "validation.imageUrl.required": "Image URL is required",
        "validation.imageUrl.invalid": "Please enter a valid URL",
        "validation.initialSupply.required": "Initial supply is required",
        "validation.initialSupply.invalid": "Initial supply must be a number",
        "validation.initialSupply.positive": "Initial supply must be greater than 0",
        "validation.initialSupply.tooLarge": "Initial supply is too large for the chosen decimals",
        "validation.initialSupply.precision": "Initial supply has more decimal places than the token allows",
        "validation.decimals.required": "Number of decimals is required",
        "validation.decimals.invalid": "Decimals must be a whole number",
        "validation.decimals.range": "Decimals must be between 0 and 9",
        "error.walletNotConnected": "Wallet not connected",
        "error.walletNotConnectedDesc": "Please connect your wallet to create a token.",
        "error.creatingToken": "Error creating token",
        "error.insufficientFunds": "Insufficient funds to create the token. Please check your wallet balance.",
        "error.transactionFailed": "Transaction simulation failed. This could be due to network congestion or an issue with the token parameters.",
        "error.generic": "An error occurred while creating the token. Please try again.",
        "error.busy": "A token is already being created.",
        "success.tokenCreated": "Token created successfully",
        "success.tokenCreatedDesc": "Your token {name} ({symbol}) has been created.",
        "progress.creating": "Creating token...",
        "preview.title": "Token Preview",
        "preview.name": "Token Name",
        "preview.symbol": "SYM",
        "transaction.success": "Transaction Successful!",
        "transaction.viewExplorer": "View Transaction",
        "steps.info": "Token Creation Steps",
        "steps.prepare": "Prepare Token Data",
        "steps.create": "Create Token",
        "steps.mint": "Mint Initial Supply",
        "steps.complete": "Complete",
        "wallet.connect": "Connect Wallet",
        "wallet.disconnect": "Disconnect",
        "wallet.connected": "Wallet connected",
        "connection.ok": "Connected",
        "connection.failed": "Connection failed",
        "log.title": "Log",
    },
    "de": {
        "app.title": "Solana Token Launchpad",
        "hero.title": "Starte deinen Solana-Token",
        "hero.description": "Erstelle deinen eigenen Token auf der Solana-Blockchain in wenigen Minuten!",
        "form.title": "Token erstellen (nur Devnet)",
        "form.name.label": "Token-Name",
        "form.name.placeholder": "Token-Name eingeben",
        "form.name.tooltip": "Der Name des Tokens (max. 32 Zeichen)",
        "form.symbol.label": "Token-Symbol",
        "form.symbol.placeholder": "Token-Symbol eingeben",
        "form.symbol.tooltip": "Kurzes Kürzel für den Token (max. 10 Großbuchstaben)",
        "form.imageUrl.label": "Bild-URL",
        "form.imageUrl.placeholder": "Bild-URL eingeben",
        "form.imageUrl.tooltip": "Eine URL zu einem Bild, das den Token darstellt",
        "form.initialSupply.label": "Initialer Vorrat",
        "form.initialSupply.placeholder": "Initialen Vorrat eingeben",
        "form.initialSupply.tooltip": "Anzahl der Tokens, die initial gemintet werden",
        "form.decimals.label": "Dezimalstellen",
        "form.decimals.placeholder": "Anzahl Dezimalstellen eingeben",
        "form.decimals.tooltip": "Anzahl der Dezimalstellen des Tokens (0-9)",
        "form.submit": "Token starten",
        "form.submitting": "Token wird erstellt...",
        "validation.name.required": "Token-Name ist erforderlich",
        "validation.name.tooLong": "Token-Name darf maximal 32 Zeichen lang sein",
        "validation.symbol.required": "Token-Symbol ist erforderlich",
        "validation.symbol.tooLong": "Token-Symbol darf maximal 10 Zeichen lang sein",
        "validation.symbol.pattern": "Token-Symbol darf nur Großbuchstaben (A-Z) enthalten",
        "validation.imageUrl.required": "Bild-URL ist erforderlich",
        "validation.imageUrl.invalid": "Bitte eine gültige URL eingeben",
        "validation.initialSupply.required": "Initialer Vorrat ist erforderlich",
        "validation.initialSupply.invalid": "Initialer Vorrat muss eine Zahl sein",
        "validation.initialSupply.positive": "Initialer Vorrat muss größer als 0 sein",
        "validation.initialSupply.tooLarge": "Initialer Vorrat ist für die gewählten Dezimalstellen zu groß",
        "validation.initialSupply.precision": "Initialer Vorrat hat mehr Nachkommastellen als der Token erlaubt",
        "validation.decimals.required": "Anzahl der Dezimalstellen ist erforderlich",
        "validation.decimals.invalid": "Dezimalstellen müssen eine ganze Zahl sein",
        "validation.decimals.range": "Dezimalstellen müssen zwischen 0 und 9 liegen",
        "error.walletNotConnected": "Wallet nicht verbunden",
        "error.walletNotConnectedDesc": "Bitte verbinden Sie Ihr Wallet, um einen Token zu erstellen.",
        "error.creatingToken": "Fehler beim Erstellen des Tokens",
        "error.insufficientFunds": "Nicht genügend Guthaben, um den Token zu erstellen. Bitte prüfen Sie den Kontostand Ihres Wallets.",
        "error.transactionFailed": "Transaktionssimulation fehlgeschlagen. Ursache kann eine Netzwerküberlastung oder ein Problem mit den Token-Parametern sein.",
        "error.generic": "Beim Erstellen des Tokens ist ein Fehler aufgetreten. Bitte versuchen Sie es erneut.",
        "error.busy": "Es wird bereits ein Token erstellt.",
        "success.tokenCreated": "Token erfolgreich erstellt",
        "success.tokenCreatedDesc": "Ihr Token {name} ({symbol}) wurde erstellt.",
        "progress.creating": "Token wird erstellt...",
        "preview.title": "Token-Vorschau",
        "preview.name": "Token-Name",
        "preview.symbol": "SYM",
        "transaction.success": "Transaktion erfolgreich!",
        "transaction.viewExplorer": "Transaktion ansehen",
        "steps.info": "Schritte der Token-Erstellung",
        "steps.prepare": "Token-Daten vorbereiten",
        "steps.create": "Token erstellen",
        "steps.mint": "Initialen Vorrat minten",
        "steps.complete": "Fertig",
        "wallet.connect": "Wallet verbinden",
        "wallet.disconnect": "Trennen",
        "wallet.connected": "Wallet verbunden",
        "connection.ok": "Verbunden",
        "connection.failed": "Verbindung fehlgeschlagen",
        "log.title": "Protokoll",
    },
}


def t(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Liefert den übersetzten Text zu einem Schlüssel; unbekannte Schlüssel werden unverändert zurückgegeben."""
    catalog = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANGUAGE])
    text = catalog.get(key) or TRANSLATIONS["en"].get(key, key)
    if kwargs:
        return text.format(**kwargs)
    return text
