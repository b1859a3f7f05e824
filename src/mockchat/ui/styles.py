"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: sidebar on the left, chat area on the right, log panel below
the chat area when enabled.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - Sidebar + Chat
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 1;
    grid-columns: 34 1fr;
    background: $background;
}

/* ============================================
   Sidebar
   ============================================ */
#sidebar {
    height: 100%;
    background: $panel;
    border-right: solid $border;
    border-title-color: $secondary;
    border-title-style: bold;
    padding: 1 1 0 1;
}

#new-chat-btn {
    width: 100%;
    margin-bottom: 1;
}

#conversation-list {
    height: 1fr;
    scrollbar-gutter: stable;
}

.conversation-item {
    height: auto;
    padding: 0 0 0 1;
    margin-bottom: 1;
    background: transparent;
    border-left: tall transparent;

    &:hover {
        background: $surface;
    }

    &.-active {
        background: $surface;
        border-left: tall $primary;
    }
}

.conversation-text {
    width: 1fr;
    height: auto;
}

.conversation-title {
    text-style: bold;
    color: $foreground;
}

.conversation-preview {
    color: $secondary;
}

.conversation-age {
    color: $text-muted;
}

.delete-btn {
    width: 5;
    min-width: 5;
    height: 3;
    border: none;
    background: transparent;
    color: $text-muted;

    &:hover {
        color: $error;
        background: $error 15%;
    }
}

.sidebar-empty {
    color: $text-muted;
    padding: 1;
}

/* ============================================
   Chat Area
   ============================================ */
#chat-area {
    height: 100%;
}

#welcome {
    height: 1fr;
    align: center middle;
}

#welcome-title {
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $foreground;
    margin-bottom: 1;
}

#welcome-subtitle {
    width: 100%;
    text-align: center;
    color: $secondary;
    margin-bottom: 2;
}

WelcomePanel Button {
    width: auto;
}

#conversation-view {
    height: 1fr;
}

#chat-header {
    height: auto;
    padding: 0 2;
    border-bottom: solid $border;
}

#chat-title {
    text-style: bold;
    color: $foreground;
}

#chat-count {
    color: $secondary;
}

#chat-window {
    height: 1fr;
    padding: 1 4;
    scrollbar-gutter: stable;
}

/* ============================================
   Message Bubbles
   ============================================ */
.message-bubble {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

.user-message {
    width: auto;
    max-width: 80%;
    background: $surface;
    padding: 1 2;
    margin-left: 12;
}

.assistant-message {
    width: 100%;
    background: transparent;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
    color: $foreground;
}

.message-time {
    height: 1;
    color: $text-muted;
}

#typing-indicator {
    height: 1;
    padding: 0 4;
    color: $secondary;
}

/* ============================================
   Chat Input Bar
   ============================================ */
ChatInputBar {
    height: 5;
    padding: 1 2 0 2;
    border-top: solid $border;
}

#chat-input {
    width: 1fr;

    &:disabled {
        background: $surface;
        color: $text-disabled;
    }
}

#send-btn {
    width: 14;
    margin: 0 0 0 1;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    display: none;
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-error {
        border: tall $error;
        background: $error 12%;
    }
}
"""
