"""
Chat Page - AI assistant for exploring WAC institution data.
"""

import logging

import streamlit as st

from config.settings import get_settings
from src.chat.agent import ChatClient, ChatRelayError
from src.chat.prompts import (
    AUTO_ROUTE,
    DISABLED,
    RESEARCH_LIBRARY,
    USER_CONTROLLED,
    PromptOptions,
    detect_sources,
)
from src.chat.validation import check_response_counts
from src.data.institutions import get_institutions
from src.data.statistics import calculate_statistics

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Chat - WAC Compare",
    page_icon="💬",
    layout="wide",
)

MODE_NAMES = {
    DISABLED: "Disabled (Data Only)",
    USER_CONTROLLED: "User-Controlled",
    AUTO_ROUTE: "Auto-Route",
}


def _render_message(message: dict):
    with st.chat_message(message["role"]):
        st.markdown(message["content"])
        if message.get("warning"):
            st.warning(message["warning"])
        sources = message.get("sources")
        if sources:
            badges = ["📊 Institution data"]
            if RESEARCH_LIBRARY in sources:
                badges.append("📚 Research library")
            st.caption(" · ".join(badges))


def main():
    st.title("💬 WAC Data Chat")

    settings = get_settings()
    if not settings.CHAT_ENABLED:
        st.info("Chat is coming soon.")
        return

    st.markdown(
        "Ask questions about the institutions in the dataset: programs, budgets, "
        "writing centers, and how they compare."
    )

    # Initialize session state
    if "messages" not in st.session_state:
        st.session_state.messages = []

    if "chat_client" not in st.session_state:
        st.session_state.chat_client = ChatClient()

    include_research = False
    with st.sidebar:
        st.header("Chat Controls")

        if settings.CHAT_MODE == USER_CONTROLLED:
            include_research = st.checkbox(
                f"Include {settings.RESEARCH_LIBRARY_NAME} research",
                value=False,
                help="Adds research on WAC pedagogy to answers. Responses are slower.",
            )

        if st.button("Clear Chat History"):
            st.session_state.messages = []
            st.rerun()

        st.divider()
        st.caption(f"Mode: {MODE_NAMES.get(settings.CHAT_MODE, settings.CHAT_MODE)}")
        st.caption("The AI may occasionally make mistakes - verify important findings.")

    options = PromptOptions(
        mode=settings.CHAT_MODE,
        include_research=include_research,
        research_library=settings.RESEARCH_LIBRARY_NAME,
    )

    with st.expander("💡 Example questions you can ask", expanded=False):
        st.markdown(
            """
            - "How many R1 institutions are in the dataset?"
            - "Which institutions have the largest WAC budgets?"
            - "Compare writing center staffing at MIT and Duke"
            - "List the institutions in California"
            - "What are best practices for faculty development in WAC?"
            """
        )

    for message in st.session_state.messages:
        _render_message(message)

    if prompt := st.chat_input("Ask about WAC programs..."):
        user_message = {"role": "user", "content": prompt}
        st.session_state.messages.append(user_message)
        _render_message(user_message)

        history = [
            {"role": m["role"], "content": m["content"]}
            for m in st.session_state.messages
            if not m.get("error")
        ]

        with st.spinner("Thinking..." if not options.uses_research else "May be consulting research..."):
            try:
                reply = st.session_state.chat_client.send(history, options)
            except ChatRelayError as e:
                logger.warning("Chat request failed: %s", e)
                assistant_message = {
                    "role": "assistant",
                    "content": f"Sorry, I encountered an error while processing your request:\n\n{e}",
                    "error": True,
                }
            else:
                stats = calculate_statistics(get_institutions(), include_metadata=True)
                assistant_message = {
                    "role": "assistant",
                    "content": reply,
                    "sources": detect_sources(reply, options),
                    "warning": check_response_counts(reply, stats),
                }

        st.session_state.messages.append(assistant_message)
        _render_message(assistant_message)


if __name__ == "__main__":
    main()
