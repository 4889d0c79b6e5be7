from textual.theme import Theme


PROJECTKIT_THEME = Theme(
    name="projectkit",
    primary="#4C9BE8",
    secondary="#8FA1B3",
    accent="#F2B134",
    foreground="#E6EDF3",
    background="#0D1117",
    surface="#161B22",
    panel="#1F2630",
    success="#57AB5A",
    warning="#F2B134",
    error="#E5534B",
    dark=True,
)
