"""NiceGUI page for the knowledge vault."""

from collections.abc import Awaitable, MutableMapping
from typing import Any

import httpx
from nicegui import Client, app, events, ui

from knowledge_vault.app import KnowledgeVault
from knowledge_vault.config import ClientConfig
from knowledge_vault.models import AuthMode, Notification, NotificationKind, PipelineStage
from knowledge_vault.state import UserStorageSessionStore

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .card-panel {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
    }

    .busy-overlay {
        position: fixed;
        inset: 0;
        background: rgba(0, 0, 0, 0.3);
        z-index: 40;
    }

    .file-active { background: #111827 !important; color: white !important; }

    .answer-box { white-space: pre-wrap; max-height: 18rem; overflow: auto; }
</style>
"""

STAGE_BUTTONS = [
    (PipelineStage.EXTRACT, "Extract"),
    (PipelineStage.CHUNK, "Chunks"),
    (PipelineStage.EMBED, "Embed"),
]


class AuthForm:
    """Values typed into the login / signup form."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.email = ""
        self.password = ""


def show_toast(notification: Notification) -> None:
    toast_type = "negative" if notification.kind is NotificationKind.ERROR else "positive"
    ui.notify(notification.message, type=toast_type, position="top-right", timeout=2500)


def open_in_new_tab(url: str) -> None:
    """Open a download URL in a new tab of the visitor's browser."""
    ui.navigate.to(url, new_tab=True)


async def open_vault(
    client: Client,
    storage: MutableMapping[str, Any],
    config: ClientConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> KnowledgeVault:
    """Build the store for one page visit and restore the visitor's session.

    Args:
        client: The NiceGUI client of the page; the store is closed when it is deleted.
        storage: Per-browser storage holding this visitor's session.
        config: Optional client configuration.
        transport: Optional httpx transport for the backend client.

    Returns:
        The started KnowledgeVault.
    """
    vault = KnowledgeVault(
        config,
        transport=transport,
        open_url=open_in_new_tab,
        store=UserStorageSessionStore(storage),
    )
    # on_disconnect also fires on reconnects; only close once the page is gone
    client.on_delete(vault.aclose)
    vault.notifications.subscribe(show_toast)
    await vault.start()
    return vault


@ui.page("/")
async def vault_page() -> None:
    """Main page: auth view without a token, file and Q&A view with one."""
    ui.add_head_html(CUSTOM_CSS)

    vault = await open_vault(ui.context.client, app.storage.user)

    form = AuthForm(name=vault.session.display_name or "")
    operation = vault.notifications.operation

    async def act(action: Awaitable[object]) -> None:
        await action
        content.refresh()

    def logout() -> None:
        vault.session.logout()
        content.refresh()

    def select(file_id: str) -> None:
        vault.registry.select(file_id)
        content.refresh()

    def clear_qa() -> None:
        vault.pipeline.clear_answer()
        content.refresh()

    def switch_mode(mode: AuthMode) -> None:
        vault.session.set_mode(mode)
        content.refresh()

    async def submit_auth() -> None:
        if vault.session.mode is AuthMode.SIGNUP:
            await act(vault.session.signup(form.name, form.email, form.password))
        else:
            await act(vault.session.login(form.email, form.password))

    async def on_upload(e: events.UploadEventArguments) -> None:
        vault.registry.stage_file(e.file.name, await e.file.read(), e.file.content_type)

    def render_auth() -> None:
        with ui.column().classes("w-full max-w-sm mx-auto mt-16 p-6 gap-3 card-panel"):
            ui.label("AI Knowledge Vault").classes("text-xl font-semibold self-center")
            ui.label(
                "Upload documents, extract text, create embeddings, "
                "and ask questions grounded in your data."
            ).classes("text-xs text-gray-600 text-center")

            with ui.row().classes("w-full gap-0"):
                for mode, caption in ((AuthMode.LOGIN, "Login"), (AuthMode.SIGNUP, "Sign Up")):
                    active = vault.session.mode is mode
                    ui.button(caption, on_click=lambda m=mode: switch_mode(m)).props(
                        f"flat square {'color=white' if active else ''}"
                    ).classes(f"flex-1 {'bg-black' if active else 'bg-gray-200'}")

            if vault.session.mode is AuthMode.SIGNUP:
                ui.input("Your Name").bind_value(form, "name").classes("w-full")
            ui.input("Email").bind_value(form, "email").classes("w-full")
            ui.input("Password", password=True).bind_value(form, "password").classes("w-full")

            caption = "Sign Up" if vault.session.mode is AuthMode.SIGNUP else "Login"
            ui.button(caption, on_click=submit_auth).props("unelevated color=black").classes(
                "w-full"
            )

    def render_file(record_id: str, file_name: str) -> None:
        with ui.column().classes("w-full border rounded p-2 gap-2"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(file_name).classes("text-sm")
                with ui.row().classes("gap-2"):
                    ui.button(
                        "Download",
                        on_click=lambda: act(vault.pipeline.download(record_id)),
                    ).props("outline dense size=sm")
                    ui.button(
                        "Delete",
                        on_click=lambda: act(vault.registry.delete(record_id)),
                    ).props("outline dense size=sm color=negative")
            with ui.row().classes("gap-2"):
                for stage, caption in STAGE_BUTTONS:
                    ui.button(
                        caption,
                        on_click=lambda s=stage: act(vault.pipeline.run_stage(record_id, s)),
                    ).props("dense size=sm unelevated color=grey-4 text-color=black")
                selected = vault.registry.active_file_id == record_id
                ui.button(
                    "Use for AI",
                    on_click=lambda: select(record_id),
                ).props("dense size=sm unelevated").classes(
                    "file-active" if selected else "bg-gray-200 text-black"
                )

    def render_main() -> None:
        who = vault.session.display_name or form.email
        greeting = f"Welcome, {who}" if who else "Welcome"
        with ui.row().classes("w-full max-w-5xl mx-auto items-center justify-between"):
            with ui.column().classes("gap-0"):
                ui.label(greeting).classes("text-lg font-semibold")
                ui.label("Flow: Upload → Extract → Chunks → Embed → Ask AI").classes(
                    "text-xs text-gray-500"
                )
            ui.button("Logout", on_click=logout).props("outline dense")

        with ui.row().classes("w-full max-w-5xl mx-auto gap-6 items-start no-wrap"):
            with ui.column().classes("flex-1 gap-4"):
                with ui.column().classes("w-full p-4 card-panel"):
                    ui.label("Upload File").classes("font-medium")
                    ui.upload(on_upload=on_upload, auto_upload=True, max_files=1).classes(
                        "w-full"
                    )
                    ui.button(
                        "Upload", on_click=lambda: act(vault.registry.upload())
                    ).props("unelevated color=black")

                with ui.column().classes("w-full p-4 card-panel"):
                    ui.label("Your Files").classes("font-medium")
                    if not vault.registry.files:
                        ui.label("No files yet").classes("text-sm text-gray-500")
                    for record in vault.registry.files:
                        render_file(record.id, record.file_name)

            with ui.column().classes("flex-1 p-4 card-panel"):
                ui.label("Ask AI").classes("font-medium")
                active = vault.registry.active_file
                ui.label(f"Selected file: {active.file_name if active else 'None'}").classes(
                    "text-xs font-bold text-gray-500"
                )
                ui.textarea(placeholder="Ask anything from the selected file...").bind_value(
                    vault.pipeline.qa, "question"
                ).classes("w-full")
                with ui.row().classes("gap-2"):
                    ui.button("Ask AI", on_click=lambda: act(vault.pipeline.ask())).props(
                        "unelevated color=black"
                    )
                    ui.button(
                        "Clear",
                        on_click=clear_qa,
                    ).props("outline")
                if vault.pipeline.qa.answer:
                    ui.label(vault.pipeline.qa.answer).classes(
                        "w-full mt-4 p-3 border rounded text-sm answer-box"
                    )

    @ui.refreshable
    def content() -> None:
        if vault.session.is_authenticated:
            render_main()
        else:
            render_auth()

    with ui.element("div").classes("w-full min-h-screen p-4"):
        content()

    with ui.element("div").classes("busy-overlay flex items-center justify-center").bind_visibility_from(
        operation, "busy"
    ):
        with ui.column().classes("bg-white rounded p-4 shadow gap-1"):
            ui.label().bind_text_from(operation, "description", lambda d: d or "").classes(
                "font-medium text-sm"
            )
            ui.label("Please wait...").classes("text-xs text-gray-500")
