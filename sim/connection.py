class Connection:
    """
    Host-side connection state.

    The congestion control algorithm may read and overwrite current_window
    and keeps whatever it needs in ca_state. ssthresh is written only by
    the host.
    """

    def __init__(self, initial_window: int = 1):
        self.current_window = initial_window
        self.ssthresh = None
        self.ca_state = None
