"""
Audio viewer - Browser speech playback for listening lessons.

Long texts are split into short chunks because browser speech engines cut
off long utterances. The chunks are spoken one after another by an embedded
component (see render_speech_player), which is shown with
streamlit.components.v1.html.
"""

import html
import json


CHUNK_SIZE = 180
INTER_CHUNK_DELAY_MS = 300
SPEECH_RATE = 0.9


def split_text(text: str, chunk_size: int = CHUNK_SIZE) -> list[str]:
    """
    Split text on whitespace into chunks of at most `chunk_size` characters.

    Words are packed greedily. A single word longer than `chunk_size` is
    sliced at the size limit, so no characters are lost.
    """
    chunks = []
    current = ""
    for word in text.split():
        pieces = [word[i:i + chunk_size] for i in range(0, len(word), chunk_size)]
        for piece in pieces:
            if not current:
                current = piece
            elif len(current) + 1 + len(piece) <= chunk_size:
                current = f"{current} {piece}"
            else:
                chunks.append(current)
                current = piece
    if current:
        chunks.append(current)
    return chunks


def render_speech_player(text: str, key: str = "player") -> str:
    """
    Build a self-contained HTML/JS speech player.

    Controls: play (restarts from the first chunk), pause, resume and stop.
    Stop cancels the queue and resets the chunk index to 0.

    Args:
        text: Text to speak
        key: Suffix that keeps element ids unique when several players are shown
    """
    # "</" would close the script element early
    chunks = json.dumps(split_text(text)).replace("</", "<\\/")
    player_id = f"speech-{html.escape(key)}"

    return f"""
    <div id="{player_id}" style="display: flex; gap: 0.5em; align-items: center; font-family: sans-serif;">
        <button id="{player_id}-play">▶ Play</button>
        <button id="{player_id}-pause">⏸ Pause</button>
        <button id="{player_id}-resume">⏯ Resume</button>
        <button id="{player_id}-stop">⏹ Stop</button>
        <span id="{player_id}-status" style="color: #666; font-size: 0.9em;"></span>
    </div>
    <script>
    (function() {{
        const chunks = {chunks};
        const status = document.getElementById("{player_id}-status");
        let index = 0;
        let run = 0;
        let timer = null;

        if (!("speechSynthesis" in window)) {{
            status.textContent = "Speech playback is not supported in this browser.";
            return;
        }}

        function finish() {{
            status.textContent = "";
        }}

        function playChunk(i, token) {{
            if (token !== run) return;
            if (i >= chunks.length) {{
                finish();
                return;
            }}
            index = i;
            status.textContent = "Playing " + (i + 1) + " / " + chunks.length;
            const utterance = new SpeechSynthesisUtterance(chunks[i]);
            utterance.rate = {SPEECH_RATE};
            utterance.pitch = 1;
            utterance.volume = 1;
            utterance.onend = function() {{
                if (token !== run) return;
                index = i + 1;
                if (index < chunks.length) {{
                    timer = setTimeout(function() {{ playChunk(index, token); }}, {INTER_CHUNK_DELAY_MS});
                }} else {{
                    finish();
                }}
            }};
            utterance.onerror = finish;
            speechSynthesis.speak(utterance);
        }}

        function stop() {{
            run += 1;
            clearTimeout(timer);
            speechSynthesis.cancel();
            index = 0;
            finish();
        }}

        document.getElementById("{player_id}-play").onclick = function() {{
            stop();
            playChunk(0, run);
        }};
        document.getElementById("{player_id}-pause").onclick = function() {{
            speechSynthesis.pause();
            status.textContent = "Paused";
        }};
        document.getElementById("{player_id}-resume").onclick = function() {{
            speechSynthesis.resume();
            status.textContent = "Playing " + (index + 1) + " / " + chunks.length;
        }};
        document.getElementById("{player_id}-stop").onclick = stop;
    }})();
    </script>
    """
