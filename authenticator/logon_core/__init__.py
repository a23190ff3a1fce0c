"""
logon_core — OPNsense Network Logon client
==========================================
Architecture: Tkinter main-thread event loop. Zero busy-wait.

  constants.py       → Version, endpoints, timeouts, theme, messages
  config.py          → Paths, logging, settings load/save, helpers
  request_builder.py → URL validation + Basic-auth request descriptors
  classifier.py      → Reply → Authenticated / SessionError / TransportError
  state.py           → SessionState, RawReply, InFlightRequest
  session.py         → PortalSession (login/keepalive/logout state machine)
  http_client.py     → Pooled requests sessions, TLS 1.2 floor, verify modes
  transport.py       → Worker-thread dispatch, main-thread completion queue
  scheduling.py      → Keepalive timer on root.after()
  login_form.py      → LoginForm (Tk root window)
  status_dialog.py   → StatusDialog (Toplevel)
  tray.py            → TrayIcon (pystray, own thread)
  app.py             → LogonApp (Tk main loop, presentation adapter)
  runner.py          → main()
"""
