#!/usr/bin/env python3
# === app.py: Grafische Benutzeroberfläche des Solana Token Launchpads ===
# Formular mit Live-Validierung, Vorschau und Schrittanzeige. Die Token-Erstellung
# läuft in einem Worker-Thread, Logs und Toasts werden per Queue an die GUI übergeben.

import argparse
import logging
import queue
import sys
import webbrowser
from tkinter import filedialog, messagebox
from typing import Dict, Optional

import customtkinter as ctk

from config import CONFIG_FILE, ConfigError, apply_cli_overrides, load_config
from constants import FORM_FIELDS, TRANSLATIONS, t
from display import explorer_address_url, explorer_tx_url, truncate_address
from launchpad import Phase, TokenLaunchpad, TokenLaunchResult
from log_utils import QueueLogHandler, get_logger, setup_logger
from notifications import Notifier
from ui_components import (
    CopyableLabel, DesignSystem, EnhancedTextbox, FormField, StatusIndicator,
    StepIndicator, ToastOverlay, TokenPreview, run_in_thread, show_error,
)
from validation import parse_form, validate_form
from wallet import KeypairWallet, check_connection, create_client, load_keypair_from_path

logger = get_logger("app")


class TokenLaunchpadUI(ctk.CTk):
    def __init__(self, config: Dict):
        super().__init__()
        self.config_data = config
        self.lang = config["language"]
        self.cluster = config.get("cluster", "devnet")

        # Backend
        self.log_queue = queue.Queue()
        self.queue_handler = QueueLogHandler(self.log_queue)
        logging.getLogger("token_launchpad").addHandler(self.queue_handler)

        self.notifier = Notifier()
        self.client = create_client(config["rpc_url"], config["commitment"])
        self.wallet = KeypairWallet(commitment=config["commitment"])
        self.launchpad = TokenLaunchpad(
            self.client, self.wallet, self.notifier, config,
            on_phase_change=lambda phase: self.after(0, self._on_phase_change, phase),
        )
        self.form_valid = False

        # UI
        self.title(t("app.title", self.lang))
        self.geometry("1100x860")
        self.minsize(900, 700)
        ctk.set_appearance_mode("Dark")
        ctk.set_default_color_theme("blue")

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(2, weight=1)

        self._create_widgets()
        self._setup_keyboard_shortcuts()
        self.protocol("WM_DELETE_WINDOW", self.on_close)

        # Start
        self.after(250, self.process_log_queue)
        self.after(250, self.process_toast_queue)
        self.start_connection_check()
        self._update_wallet_ui()

    # === Aufbau ===
    def _create_widgets(self):
        self._create_header()
        self._create_hero()
        self._create_form()
        self._create_side_panel()
        self._create_log_area()

        # Toasts liegen oben mittig über allem
        self.toast_overlay = ToastOverlay(self)
        self.toast_overlay.place(relx=0.5, y=DesignSystem.SPACING['sm'], anchor="n", relwidth=0.5)

    def _create_header(self):
        header = ctk.CTkFrame(self, corner_radius=0)
        header.grid(row=0, column=0, columnspan=2, sticky="ew")
        header.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(header, text=f"{DesignSystem.ICONS['rocket']} {t('app.title', self.lang)}",
                     font=ctk.CTkFont(size=18, weight="bold")).grid(row=0, column=0, padx=DesignSystem.SPACING['lg'], pady=DesignSystem.SPACING['md'], sticky="w")
        self.connection_status = StatusIndicator(header, status="loading", text=self.config_data["rpc_url"])
        self.connection_status.grid(row=0, column=1, padx=DesignSystem.SPACING['md'], sticky="e")
        self.wallet_label = CopyableLabel(header, text="", max_length=20)
        self.wallet_label.grid(row=0, column=2, padx=DesignSystem.SPACING['sm'], sticky="e")
        self.wallet_button = ctk.CTkButton(header, text="", width=160, command=self.on_wallet_button)
        self.wallet_button.grid(row=0, column=3, padx=DesignSystem.SPACING['lg'], pady=DesignSystem.SPACING['md'], sticky="e")

    def _create_hero(self):
        hero = ctk.CTkFrame(self, fg_color="transparent")
        hero.grid(row=1, column=0, columnspan=2, padx=DesignSystem.SPACING['xl'], pady=(DesignSystem.SPACING['xl'], DesignSystem.SPACING['md']), sticky="ew")
        ctk.CTkLabel(hero, text=t("hero.title", self.lang), font=ctk.CTkFont(size=28, weight="bold"),
                     text_color=DesignSystem.COLORS['primary']).pack()
        ctk.CTkLabel(hero, text=t("hero.description", self.lang), text_color=DesignSystem.COLORS['text_secondary']).pack()

    def _create_form(self):
        form_frame = ctk.CTkFrame(self, corner_radius=DesignSystem.RADIUS['lg'])
        form_frame.grid(row=2, column=0, padx=(DesignSystem.SPACING['xl'], DesignSystem.SPACING['md']), pady=DesignSystem.SPACING['md'], sticky="nsew")
        form_frame.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(form_frame, text=t("form.title", self.lang), font=ctk.CTkFont(size=18, weight="bold")).grid(
            row=0, column=0, padx=DesignSystem.SPACING['lg'], pady=(DesignSystem.SPACING['lg'], DesignSystem.SPACING['sm']), sticky="w")

        self.fields: Dict[str, FormField] = {}
        for row, name in enumerate(FORM_FIELDS, start=1):
            field = FormField(form_frame, name, self.lang, on_change=self.on_form_change)
            field.grid(row=row, column=0, padx=DesignSystem.SPACING['lg'], pady=DesignSystem.SPACING['xs'], sticky="ew")
            self.fields[name] = field

        self.submit_button = ctk.CTkButton(
            form_frame, text=f"{DesignSystem.ICONS['rocket']} {t('form.submit', self.lang)}", height=40,
            fg_color=DesignSystem.COLORS['primary'], hover_color=DesignSystem.COLORS['primary_hover'],
            text_color=DesignSystem.COLORS['text_dark'], command=self.on_submit)
        self.submit_button.grid(row=len(FORM_FIELDS) + 1, column=0, padx=DesignSystem.SPACING['lg'], pady=DesignSystem.SPACING['lg'], sticky="ew")

    def _create_side_panel(self):
        side = ctk.CTkFrame(self, fg_color="transparent")
        side.grid(row=2, column=1, padx=(0, DesignSystem.SPACING['xl']), pady=DesignSystem.SPACING['md'], sticky="nsew")
        side.grid_columnconfigure(0, weight=1)

        steps_frame = ctk.CTkFrame(side, corner_radius=DesignSystem.RADIUS['lg'])
        steps_frame.grid(row=0, column=0, sticky="ew")
        ctk.CTkLabel(steps_frame, text=t("steps.info", self.lang), font=ctk.CTkFont(size=16, weight="bold")).pack(
            anchor="w", padx=DesignSystem.SPACING['md'], pady=(DesignSystem.SPACING['md'], DesignSystem.SPACING['sm']))
        self.step_indicator = StepIndicator(steps_frame, self.lang)
        self.step_indicator.pack(fill="x", padx=DesignSystem.SPACING['sm'], pady=(0, DesignSystem.SPACING['md']))

        self.preview = TokenPreview(side, self.lang)
        self.preview.grid(row=1, column=0, pady=DesignSystem.SPACING['md'], sticky="ew")

        # Erscheint, sobald die erste Transaktion bestätigt ist
        self.transaction_frame = ctk.CTkFrame(side, corner_radius=DesignSystem.RADIUS['lg'])
        ctk.CTkLabel(self.transaction_frame, text=f"{DesignSystem.ICONS['success']} {t('transaction.success', self.lang)}",
                     text_color=DesignSystem.COLORS['success']).pack(anchor="w", padx=DesignSystem.SPACING['md'], pady=(DesignSystem.SPACING['md'], 0))
        self.explorer_button = ctk.CTkButton(self.transaction_frame, text=f"{DesignSystem.ICONS['link']} {t('transaction.viewExplorer', self.lang)}",
                                             command=self.open_explorer)
        self.explorer_button.pack(fill="x", padx=DesignSystem.SPACING['md'], pady=DesignSystem.SPACING['md'])
        # Mint-Adresse des zuletzt erstellten Tokens, gefüllt nach Abschluss
        self.mint_label = CopyableLabel(self.transaction_frame, text="", max_length=30)

    def _create_log_area(self):
        log_frame = ctk.CTkFrame(self, corner_radius=DesignSystem.RADIUS['lg'])
        log_frame.grid(row=3, column=0, columnspan=2, padx=DesignSystem.SPACING['xl'], pady=(0, DesignSystem.SPACING['xl']), sticky="nsew")
        log_frame.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(log_frame, text=f"📋 {t('log.title', self.lang)}").grid(row=0, column=0, padx=DesignSystem.SPACING['md'], pady=(DesignSystem.SPACING['sm'], 0), sticky="w")
        self.log_textbox = EnhancedTextbox(log_frame, height=140)
        self.log_textbox.grid(row=1, column=0, sticky="nsew", padx=DesignSystem.SPACING['md'], pady=(DesignSystem.SPACING['xs'], DesignSystem.SPACING['md']))

    def _setup_keyboard_shortcuts(self):
        self.bind("<Control-Return>", lambda e: self.on_submit())
        self.bind("<Control-q>", lambda e: self.on_close())

    # === Formular ===
    def form_values(self) -> Dict[str, str]:
        return {name: field.get() for name, field in self.fields.items()}

    def on_form_change(self):
        values = self.form_values()
        errors = validate_form(values, self.lang)
        for name, field in self.fields.items():
            # Leere Felder erst beim Absenden bemängeln
            field.set_error(errors.get(name) if values[name] else None)
        self.form_valid = not errors
        self.preview.update_preview(values)
        self._update_submit_state()

    def reset_form(self):
        for field in self.fields.values():
            field.clear()
        self.on_form_change()

    def _update_submit_state(self):
        busy = self.launchpad.is_loading
        enabled = self.wallet.connected and self.form_valid and not busy
        label = t("form.submitting", self.lang) if busy else t("form.submit", self.lang)
        self.submit_button.configure(state="normal" if enabled else "disabled",
                                     text=f"{DesignSystem.ICONS['spinner' if busy else 'rocket']} {label}")
        for field in self.fields.values():
            field.set_enabled(not busy)

    def on_submit(self):
        data, errors = parse_form(self.form_values(), self.lang)
        for name, field in self.fields.items():
            field.set_error(errors.get(name))
        if data is None:
            logger.warning(f"Formular ungültig: {', '.join(sorted(errors))}")
            return

        self.transaction_frame.grid_forget()
        self.mint_label.pack_forget()
        thread = self.launchpad.run_async(
            data,
            on_done=lambda result: self.after(0, self._on_launch_done, result),
            on_reset=lambda: self.after(0, self.reset_form),
        )
        if thread is not None:
            self._update_submit_state()

    def _on_launch_done(self, result: Optional[TokenLaunchResult]):
        if result is not None:
            logger.info(f"Mint-Adresse: {result.mint} ({explorer_address_url(str(result.mint), self.cluster)})", extra={"tag": "header"})
            logger.info(f"Token-Konto: {result.associated_token}", extra={"tag": "header"})
        self._update_submit_state()

    def _on_phase_change(self, phase: Phase):
        self.step_indicator.set_phase(int(phase))
        if phase == Phase.MINT and self.launchpad.last_signature:
            self.transaction_frame.grid(row=2, column=0, sticky="ew")
        elif phase == Phase.COMPLETE and self.launchpad.last_result is not None:
            self.mint_label.set_text(str(self.launchpad.last_result.mint))
            self.mint_label.pack(fill="x", padx=DesignSystem.SPACING['md'], pady=(0, DesignSystem.SPACING['md']))

    def open_explorer(self):
        if self.launchpad.last_signature:
            webbrowser.open(explorer_tx_url(self.launchpad.last_signature, self.cluster))

    # === Wallet & Verbindung ===
    def on_wallet_button(self):
        if self.wallet.connected:
            if self.launchpad.is_loading:
                return
            logger.info(f"Wallet {self.wallet.public_key} getrennt.")
            self.wallet.disconnect()
            self._update_wallet_ui()
            return

        path = filedialog.askopenfilename(
            parent=self, title=t("wallet.connect", self.lang),
            filetypes=[("Keypair JSON", "*.json"), ("Alle Dateien", "*.*")])
        if path:
            self.connect_wallet(path)

    def connect_wallet(self, path: str) -> bool:
        try:
            keypair = load_keypair_from_path(path)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Wallet konnte nicht geladen werden: {e}")
            show_error(self, t("error.walletNotConnected", self.lang), str(e))
            self._update_wallet_ui()
            return False
        self.wallet.connect(keypair, source=path)
        logger.info(f"{t('wallet.connected', self.lang)}: {keypair.pubkey()}", extra={"tag": "success"})
        self._update_wallet_ui()
        return True

    def _update_wallet_ui(self):
        if self.wallet.connected:
            address = str(self.wallet.public_key)
            self.wallet_label.set_text(address)
            self.wallet_label.copy_button.configure(state="normal")
            self.wallet_button.configure(text=f"{DesignSystem.ICONS['wallet']} {truncate_address(address, 4, 4)} · {t('wallet.disconnect', self.lang)}")
        else:
            self.wallet_label.set_text("")
            self.wallet_label.copy_button.configure(state="disabled")
            self.wallet_button.configure(text=f"{DesignSystem.ICONS['wallet']} {t('wallet.connect', self.lang)}")
            self.notifier.error(t("error.walletNotConnected", self.lang), t("error.walletNotConnectedDesc", self.lang))
        self._update_submit_state()

    def start_connection_check(self):
        self.connection_status.set_status("loading", self.config_data["rpc_url"])
        run_in_thread(self._connection_check_thread)

    def _connection_check_thread(self):
        ok = check_connection(self.client)
        self.after(0, self._update_connection_ui, ok)

    def _update_connection_ui(self, ok: bool):
        rpc_url = self.config_data["rpc_url"]
        if ok:
            self.connection_status.set_status("success", f"{t('connection.ok', self.lang)}: {rpc_url}")
        else:
            self.connection_status.set_status("error", f"{t('connection.failed', self.lang)}: {rpc_url}")
            logger.warning(f"Keine Verbindung zum RPC-Endpunkt {rpc_url}.")

    # === Queues ===
    def process_log_queue(self):
        try:
            while True:
                self.log_textbox.append_text(*self.log_queue.get_nowait())
        except queue.Empty:
            pass
        finally:
            self.after(200, self.process_log_queue)

    def process_toast_queue(self):
        try:
            for toast in self.notifier.drain():
                self.toast_overlay.show(toast)
        finally:
            self.after(200, self.process_toast_queue)

    def on_close(self):
        logging.getLogger("token_launchpad").removeHandler(self.queue_handler)
        self.destroy()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Solana Token Launchpad")
    parser.add_argument("--config", default=CONFIG_FILE, help="Pfad zur config.json")
    parser.add_argument("--rpc-url", help="RPC-Endpunkt (überschreibt config.json und SOLANA_RPC_URL)")
    parser.add_argument("--wallet", help="Pfad zur Keypair-Datei, die beim Start verbunden wird")
    parser.add_argument("--lang", choices=sorted(TRANSLATIONS), help="Sprache der Oberfläche")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        apply_cli_overrides(config, rpc_url=args.rpc_url, wallet=args.wallet, lang=args.lang)
    except ConfigError as e:
        messagebox.showerror("Konfigurationsfehler", str(e))
        sys.exit(1)

    setup_logger(config.get("log_folder", "logs"))
    logger.info(f"Starte Launchpad ({config['cluster']}, {config['rpc_url']})", extra={"tag": "header"})

    app = TokenLaunchpadUI(config)
    if config.get("wallet_path"):
        app.connect_wallet(config["wallet_path"])
    app.mainloop()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        messagebox.showerror("Unerwarteter Fehler", f"Ein schwerwiegender Fehler ist aufgetreten:\n\n{e}")
        raise
