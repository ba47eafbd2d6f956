# === ui_components.py: Design-System und UI-Komponenten des Launchpads ===

import threading
from tkinter import messagebox
from typing import Callable, Dict, List, Optional

import customtkinter as ctk

from constants import DEFAULT_LANGUAGE, MAX_VISIBLE_TOASTS, TOAST_DURATION_MS, t
from display import STEP_ICONS, fetch_preview_image, preview_model, step_states
from log_utils import get_logger
from notifications import Toast

logger = get_logger("ui")

# === Design-System ===

class DesignSystem:
    """Zentrale Konfiguration für das UI-Design."""
    COLORS = {
        "primary": "#FDE047",       # Gelb
        "primary_hover": "#FACC15",
        "accent": "#93C5FD",        # Blau (Formularbereich)
        "background": "#111111",
        "foreground": "#1F1F1F",
        "text": "#FFFFFF",
        "text_dark": "#000000",
        "text_secondary": "#B0B0B0",
        "inactive": "#6B7280",
        "success": "#28A745",
        "error": "#DC3545",
        "warning": "#FFC107",
        "info": "#17A2B8",
        "log_header": "#00A0D2",
    }
    SPACING = {"xs": 4, "sm": 8, "md": 12, "lg": 16, "xl": 24}
    RADIUS = {"sm": 4, "md": 8, "lg": 12}
    ICONS = {
        "rocket": "🚀", "wallet": "💼", "token": "🪙", "tag": "🏷️",
        "image": "🖼️", "layers": "📚", "hash": "#️⃣",
        "info": "ℹ️", "success": "✅", "error": "❌", "warning": "⚠️",
        "clipboard": "📋", "link": "🔗", "spinner": "⏳",
    }
    FIELD_ICONS = {
        "name": "token", "symbol": "tag", "imageUrl": "image",
        "initialSupply": "layers", "decimals": "hash",
    }
    TOAST_COLORS = {
        "loading": "info", "success": "success", "error": "error", "info": "foreground",
    }


class StatusIndicator(ctk.CTkFrame):
    """Ein UI-Element zur Anzeige eines Status mit Icon und Text."""
    def __init__(self, master, status="unknown", text=""):
        super().__init__(master, fg_color="transparent")
        self.status_icon = ctk.CTkLabel(self, text="")
        self.status_icon.pack(side="left", padx=(0, DesignSystem.SPACING['sm']))
        self.status_label = ctk.CTkLabel(self, text=text)
        self.status_label.pack(side="left")
        self.set_status(status, text)

    def set_status(self, status, text):
        icon_map = {
            "success": DesignSystem.ICONS['success'], "error": DesignSystem.ICONS['error'],
            "warning": DesignSystem.ICONS['warning'], "info": DesignSystem.ICONS['info'],
            "loading": DesignSystem.ICONS['spinner'], "unknown": "❔"
        }
        color_map = {
            "success": DesignSystem.COLORS['success'], "error": DesignSystem.COLORS['error'],
            "warning": DesignSystem.COLORS['warning'], "info": DesignSystem.COLORS['text_secondary'],
            "loading": DesignSystem.COLORS['info'], "unknown": DesignSystem.COLORS['text_secondary']
        }
        self.status_icon.configure(text=icon_map.get(status, "❔"))
        self.status_label.configure(text=text, text_color=color_map.get(status, "white"))


class CopyableLabel(ctk.CTkFrame):
    """Ein Label mit einem Button zum Kopieren des Inhalts."""
    def __init__(self, master, text="", max_length=50):
        super().__init__(master, fg_color="transparent")
        self.max_length = max_length
        self.text_to_copy = text
        self.label = ctk.CTkLabel(self, text=self._shorten(text), text_color=DesignSystem.COLORS['text_secondary'])
        self.label.pack(side="left", fill="x", expand=True)
        self.copy_button = ctk.CTkButton(self, text=DesignSystem.ICONS['clipboard'], width=30, command=self.copy_to_clipboard)
        self.copy_button.pack(side="right", padx=(DesignSystem.SPACING['sm'], 0))

    def _shorten(self, text):
        if len(text) <= self.max_length:
            return text
        return f"{text[:self.max_length//2-2]}...{text[-self.max_length//2+2:]}"

    def copy_to_clipboard(self):
        self.clipboard_clear()
        self.clipboard_append(self.text_to_copy)
        self.copy_button.configure(text="✅")
        self.after(2000, lambda: self.copy_button.configure(text=DesignSystem.ICONS['clipboard']))

    def set_text(self, text):
        self.text_to_copy = text
        self.label.configure(text=self._shorten(text))


class EnhancedTextbox(ctk.CTkTextbox):
    """Ein Textbox-Widget mit Farb-Tagging-Unterstützung."""
    def __init__(self, master, **kwargs):
        super().__init__(master, state="disabled", **kwargs)
        self.tag_config("success", foreground=DesignSystem.COLORS['success'])
        self.tag_config("error", foreground=DesignSystem.COLORS['error'])
        self.tag_config("warning", foreground=DesignSystem.COLORS['warning'])
        self.tag_config("info", foreground=DesignSystem.COLORS['text_secondary'])
        self.tag_config("header", foreground=DesignSystem.COLORS['log_header'])

    def append_text(self, message, level="info"):
        self.configure(state="normal")
        self.insert("end", message + "\n", level)
        self.configure(state="disabled")
        self.see("end")


# === Launchpad-spezifische Komponenten ===

class FormField(ctk.CTkFrame):
    """Beschriftetes Eingabefeld mit Hinweistext und Inline-Fehlermeldung."""
    def __init__(self, master, field_name: str, lang: str = DEFAULT_LANGUAGE,
                 on_change: Optional[Callable[[], None]] = None):
        super().__init__(master, fg_color="transparent")
        self.field_name = field_name
        self.grid_columnconfigure(0, weight=1)

        icon = DesignSystem.ICONS[DesignSystem.FIELD_ICONS[field_name]]
        ctk.CTkLabel(
            self, text=f"{icon} {t(f'form.{field_name}.label', lang)}",
            font=ctk.CTkFont(size=14, weight="bold"), anchor="w"
        ).grid(row=0, column=0, sticky="w")
        ctk.CTkLabel(
            self, text=t(f"form.{field_name}.tooltip", lang),
            font=ctk.CTkFont(size=11), text_color=DesignSystem.COLORS['text_secondary'], anchor="w"
        ).grid(row=1, column=0, sticky="w")

        self.entry = ctk.CTkEntry(self, placeholder_text=t(f"form.{field_name}.placeholder", lang))
        self.entry.grid(row=2, column=0, sticky="ew", pady=(DesignSystem.SPACING['xs'], 0))
        if on_change:
            self.entry.bind("<KeyRelease>", lambda event: on_change())

        self.error_label = ctk.CTkLabel(self, text="", text_color=DesignSystem.COLORS['error'],
                                        font=ctk.CTkFont(size=11), anchor="w")
        self.error_label.grid(row=3, column=0, sticky="w")

    def get(self) -> str:
        return self.entry.get()

    def clear(self):
        # Deaktivierte Entries ignorieren delete()
        self.entry.configure(state="normal")
        self.entry.delete(0, "end")
        self.set_error(None)

    def set_error(self, message: Optional[str]):
        self.error_label.configure(text=message or "")

    def set_enabled(self, enabled: bool):
        self.entry.configure(state="normal" if enabled else "disabled")


class StepIndicator(ctk.CTkFrame):
    """Zeigt die vier Schritte der Token-Erstellung; erreichte Schritte sind hervorgehoben."""
    def __init__(self, master, lang: str = DEFAULT_LANGUAGE):
        super().__init__(master, fg_color="transparent")
        self.lang = lang
        self.icons: List[ctk.CTkLabel] = []
        self.labels: List[ctk.CTkLabel] = []
        for index, (title, _) in enumerate(step_states(0, lang)):
            self.grid_columnconfigure(index, weight=1)
            icon = ctk.CTkLabel(self, text=STEP_ICONS[index], width=36, height=36, corner_radius=18)
            icon.grid(row=0, column=index)
            label = ctk.CTkLabel(self, text=title, font=ctk.CTkFont(size=11))
            label.grid(row=1, column=index, padx=DesignSystem.SPACING['xs'])
            self.icons.append(icon)
            self.labels.append(label)
        self.set_phase(0)

    def set_phase(self, phase: int):
        for icon, (_, reached) in zip(self.icons, step_states(phase, self.lang)):
            color = DesignSystem.COLORS['primary'] if reached else DesignSystem.COLORS['inactive']
            icon.configure(fg_color=color)


class TokenPreview(ctk.CTkFrame):
    """Live-Vorschau von Name, Symbol und Bild des Tokens."""
    def __init__(self, master, lang: str = DEFAULT_LANGUAGE):
        super().__init__(master, corner_radius=DesignSystem.RADIUS['md'])
        self.lang = lang
        self._image_url = ""
        self._ctk_image = None

        ctk.CTkLabel(self, text=t("preview.title", lang), font=ctk.CTkFont(size=16, weight="bold")).grid(
            row=0, column=0, columnspan=2, padx=DesignSystem.SPACING['md'], pady=(DesignSystem.SPACING['md'], DesignSystem.SPACING['sm']), sticky="w")
        self.image_label = ctk.CTkLabel(self, text=DesignSystem.ICONS['token'], width=64, height=64,
                                        font=ctk.CTkFont(size=32))
        self.image_label.grid(row=1, column=0, rowspan=2, padx=DesignSystem.SPACING['md'], pady=(0, DesignSystem.SPACING['md']))
        self.name_label = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=14, weight="bold"), anchor="w")
        self.name_label.grid(row=1, column=1, sticky="sw", padx=(0, DesignSystem.SPACING['md']))
        self.symbol_label = ctk.CTkLabel(self, text="", text_color=DesignSystem.COLORS['text_secondary'], anchor="w")
        self.symbol_label.grid(row=2, column=1, sticky="nw", padx=(0, DesignSystem.SPACING['md']))
        self.update_preview({})

    def update_preview(self, fields: Dict[str, str]):
        model = preview_model(fields, self.lang)
        self.name_label.configure(text=model["name"])
        self.symbol_label.configure(text=model["symbol"])
        if model["image_url"] != self._image_url:
            self._image_url = model["image_url"]
            self._load_image(self._image_url)

    def _load_image(self, url: str):
        if not url:
            self._show_placeholder()
            return

        def worker():
            try:
                image = fetch_preview_image(url)
            except Exception as e:
                logger.warning(f"Vorschaubild konnte nicht geladen werden ({url}): {e}")
                image = None
            self.after(0, self._apply_image, url, image)

        run_in_thread(worker)

    def _apply_image(self, url, image):
        # Inzwischen geänderte URL: Ergebnis verwerfen
        if url != self._image_url:
            return
        if image is None:
            self._show_placeholder()
            return
        self._ctk_image = ctk.CTkImage(light_image=image, dark_image=image, size=image.size)
        self.image_label.configure(image=self._ctk_image, text="")

    def _show_placeholder(self):
        self._ctk_image = None
        self.image_label.configure(image=None, text=DesignSystem.ICONS['token'])


class ToastOverlay(ctk.CTkFrame):
    """Transiente Benachrichtigungen oben mittig; Toasts mit gleicher ID ersetzen einander."""
    def __init__(self, master, duration_ms: int = TOAST_DURATION_MS, max_visible: int = MAX_VISIBLE_TOASTS):
        super().__init__(master, fg_color="transparent")
        self.duration_ms = duration_ms
        self.max_visible = max_visible
        self._toasts: List[Dict] = []

    def show(self, toast: Toast):
        entry = next((e for e in self._toasts if toast.toast_id and e["toast_id"] == toast.toast_id), None)
        if entry is None:
            frame = ctk.CTkFrame(self, corner_radius=DesignSystem.RADIUS['md'])
            label = ctk.CTkLabel(frame, text="", wraplength=420, justify="left")
            label.pack(side="left", padx=DesignSystem.SPACING['md'], pady=DesignSystem.SPACING['sm'])
            close = ctk.CTkButton(frame, text="✕", width=24, height=24, fg_color="transparent")
            close.pack(side="right", padx=DesignSystem.SPACING['xs'])
            entry = {"toast_id": toast.toast_id, "frame": frame, "label": label, "timer": None}
            close.configure(command=lambda e=entry: self._dismiss(e))
            frame.pack(fill="x", pady=(0, DesignSystem.SPACING['xs']))
            self._toasts.append(entry)

        if entry["timer"] is not None:
            self.after_cancel(entry["timer"])
            entry["timer"] = None

        color = DesignSystem.COLORS[DesignSystem.TOAST_COLORS[toast.kind]]
        icon = {"loading": DesignSystem.ICONS['spinner'], "success": DesignSystem.ICONS['success'],
                "error": DesignSystem.ICONS['error']}.get(toast.kind, DesignSystem.ICONS['info'])
        text = f"{icon} {toast.title}" + (f"\n{toast.description}" if toast.description else "")
        entry["frame"].configure(fg_color=color)
        entry["label"].configure(text=text)

        # Lade-Toasts bleiben stehen, bis sie ersetzt werden
        if toast.kind != "loading":
            entry["timer"] = self.after(self.duration_ms, lambda e=entry: self._dismiss(e))

        while len(self._toasts) > self.max_visible:
            self._dismiss(self._toasts[0])

    def _dismiss(self, entry):
        if entry not in self._toasts:
            return
        if entry["timer"] is not None:
            self.after_cancel(entry["timer"])
        entry["frame"].destroy()
        self._toasts.remove(entry)


# === Utility-Funktionen ===

def show_error(parent, title: str, message: str):
    messagebox.showerror(title, message, parent=parent)


def run_in_thread(func: Callable, *args):
    """Führt eine Funktion in einem separaten Thread aus."""
    thread = threading.Thread(target=func, args=args, daemon=True)
    thread.start()
    return thread
