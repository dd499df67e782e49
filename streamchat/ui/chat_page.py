"""NiceGUI chat interface driven by the conversation store."""

from nicegui import app, ui

from streamchat.chat import (
    ClientConfig,
    ConversationStore,
    JsonFileStateStore,
    MappingStateStore,
    StateStore,
    TurnController,
    get_client_config,
)
from streamchat.models.schemas import ConversationSession, Message, Role

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f8fafc; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #2563eb; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 4px 18px 18px;
    }

    .message-assistant {
        background: white;
        color: #334155;
        border: 1px solid #dbeafe;
        border-radius: 4px 18px 18px 18px;
    }

    .message-failed {
        background: #fef2f2;
        color: #dc2626;
        border: 1px solid #fecaca;
    }

    .avatar-user { background: #2563eb; }
    .avatar-assistant { background: white; border: 1px solid #dbeafe; }

    .status-capsule {
        background: white;
        border: 1px solid #dbeafe;
        border-radius: 9999px;
    }

    .cursor {
        display: inline-block; width: 6px; height: 16px;
        background: #60a5fa;
        animation: pulse 1s infinite;
    }

    @keyframes pulse {
        0%, 100% { opacity: 1; }
        50% { opacity: 0.3; }
    }

    .send-btn { background: #2563eb !important; }
</style>
"""


def _timestamp(message: Message) -> str:
    return message.created_at.strftime("%I:%M %p")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    config: ClientConfig = get_client_config()
    store = ConversationStore(greeting=config.greeting_text)
    state_store: StateStore = (
        JsonFileStateStore(config.state_file)
        if config.state_file
        else MappingStateStore(app.storage.user)
    )
    controller = TurnController(store, config=config, state_store=state_store)
    controller.load_or_create_conversation()
    ui.context.client.on_disconnect(controller.aclose)

    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        color = "text-white" if is_user else "text-blue-600"
        avatar_classes = f"w-10 h-10 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes(f"{color} text-lg")

    def render_message(msg: Message, session: ConversationSession) -> None:
        is_user = msg.role is Role.USER
        is_live = msg.id == session.live_message_id
        align = "flex-row-reverse" if is_user else ""
        bubble = "message-user" if is_user else "message-assistant"
        if msg.failed:
            bubble = "message-failed"

        with ui.row().classes(f"w-full gap-3 items-start no-wrap {align}"):
            render_avatar(is_user)
            with ui.column().classes(
                f"max-w-[85%] gap-1 {'items-end' if is_user else 'items-start'}"
            ):
                with ui.element("div").classes(f"px-5 py-3 {bubble}"):
                    if msg.failed:
                        with ui.row().classes("items-center gap-2"):
                            ui.icon("error_outline").classes("text-base")
                            ui.label(msg.text).classes("text-sm")
                    elif is_user:
                        ui.label(msg.text).classes("text-sm whitespace-pre-wrap break-words")
                    else:
                        ui.markdown(msg.text).classes("text-sm leading-relaxed")
                        if is_live and not session.transient_status:
                            ui.element("span").classes("cursor")

                if is_live and session.transient_status:
                    with ui.row().classes("status-capsule items-center gap-2 px-3 py-1"):
                        ui.spinner(size="xs")
                        ui.label(session.transient_status).classes("text-xs text-gray-500")

                ui.label(_timestamp(msg)).classes("text-[10px] text-gray-400 px-1")

    @ui.refreshable
    def messages_view() -> None:
        session = store.session
        if not session.messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
            return
        for msg in session.messages:
            render_message(msg, session)

    @ui.refreshable
    def conversation_badge() -> None:
        ui.label(f"ID: {store.session.conversation_id[-6:]}").classes(
            "text-xs text-white/80 font-mono"
        )

    def on_change(session: ConversationSession) -> None:
        messages_view.refresh()
        conversation_badge.refresh()
        streaming = store.is_streaming
        input_field.set_enabled(not streaming)
        send_btn.set_enabled(not streaming)
        scroll_area.scroll_to(percent=1.0)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or controller.in_flight:
            return

        input_field.value = ""
        # A failed turn is shown by its bubble; the store drives the re-render.
        await controller.submit(text)

    def new_chat() -> None:
        controller.new_conversation()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("auto_awesome").classes("text-white text-2xl")
                with ui.column().classes("gap-0"):
                    ui.label("Agent Chat").classes("text-lg font-semibold text-white")
                    conversation_badge()
            ui.button(icon="delete_sweep", on_click=new_chat).props("flat round color=white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-slate-50") as scroll_area:
            with ui.column().classes("w-full p-5 gap-6"):
                messages_view()

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-center bg-white border-t no-wrap"):
            input_field = (
                ui.input(placeholder="Type your question...")
                .props("rounded outlined dense")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )

    store.subscribe(on_change)
