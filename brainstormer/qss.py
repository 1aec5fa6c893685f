# brainstormer/qss.py
# Noir Glass base with the Solar accent; reels get a focus band on the center row

QSS = r"""
/* -------- Base -------- */
* {
  font-family: "Segoe UI", "Inter", system-ui, sans-serif;
  font-size: 10.5pt;
  color: #E8ECF5;
}
QWidget { background: #0B0F14; }
#brainstormerRoot {
  background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
    stop:0 #0B0F14, stop:0.5 #0D1118, stop:1 #0F1319);
}

/* No native focus glow */
*:focus { outline: 0; }

#status {
  color: #FFD36B;
  min-height: 18px;
}

/* -------- Reels -------- */
#reel {
  background: rgba(18, 24, 32, 0.68);
  border: 1px solid rgba(255,255,255,0.08);
  border-radius: 14px;
}
#reel[locked="true"] {
  border: 1px solid rgba(255,168,76,0.55);
  background: rgba(255,154,60,0.08);
}
#reelTitle {
  color: #D5DEEE;
  font-weight: 600;
  letter-spacing: .2px;
  background: transparent;
}
#reelViewport {
  background: rgba(16, 21, 28, 0.96);
  border: 1px solid rgba(255,255,255,0.12);
  border-radius: 10px;
}
#rowitem {
  color: rgba(201,211,230,0.55);
  background: transparent;
  padding: 4px 8px;
}
#rowitem[center="true"] {
  color: #FFE6C7;
  font-weight: 600;
  font-size: 12pt;
  background: rgba(255,168,76,0.18);
  border-radius: 8px;
}

/* -------- Concept card -------- */
QGroupBox {
  background: rgba(18, 24, 32, 0.68);
  border: 1px solid rgba(255,255,255,0.08);
  border-radius: 14px;
  margin-top: 14px;
  padding: 12px 12px 14px 12px;
}
QGroupBox::title {
  subcontrol-origin: margin;
  subcontrol-position: top left;
  padding: 0 8px;
  margin-left: 6px;
  color: #D5DEEE;
  font-weight: 600;
}
#field { background: transparent; }
#fieldLabel { color: #9AA7BD; font-size: 9pt; background: transparent; }
#fieldValue { color: #FFE6C7; font-weight: 600; background: transparent; }
#fieldDesc  { color: #C9D3E6; font-style: italic; background: transparent; }

/* -------- Buttons (Solar accent) -------- */
QPushButton {
  background: rgba(255,154,60,0.14);
  border: 1px solid rgba(255,154,60,0.42);
  border-radius: 12px;
  padding: 6px 12px;
}
QPushButton:hover  { background: rgba(255,154,60,0.22); }
QPushButton:pressed{ background: rgba(255,154,60,0.30); }
QPushButton:disabled {
  color: rgba(232,236,245,0.45);
  border: 1px solid rgba(255,255,255,0.10);
  background: rgba(255,255,255,0.04);
}
"""
