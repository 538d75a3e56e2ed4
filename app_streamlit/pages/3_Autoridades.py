# --------------------------------------------------------------
# File: 3_Autoridades.py
# Description: Panel de autoridades con turistas registrados y alertas recientes.
# --------------------------------------------------------------

import streamlit as st

from api import services
from touristsafe.errors import StoreUnavailable

ctx = services.get_context()

st.title("🏛️ Autoridades")

authority = st.session_state.get("authority")
if not authority:
    username = st.text_input("Usuario")
    password = st.text_input("Contraseña", type="password")
    if st.button("Entrar"):
        result = services.authority_login(ctx, username, password)
        if result["success"]:
            st.session_state["authority"] = result["authority"]
            st.rerun()
        else:
            st.error(result["error"])
    st.stop()

st.write(f"Sesión: **{authority['name']}** ({authority['role']})")

status = services.sms_status(ctx)
st.caption(status["message"])

st.subheader("Alertas recientes")
recent = services.list_alerts(ctx)
if recent["success"]:
    st.table(recent["alerts"])
else:
    st.error(recent["error"])

st.subheader("Turistas registrados")
try:
    tourists = services.list_tourists(ctx)
except StoreUnavailable as exc:
    st.error(exc.message)
    tourists = []
for tourist in tourists:
    with st.expander(f"{tourist['full_name']} - {tourist['id']}"):
        st.json(tourist)
        if st.button("Avisar al contacto", key=f"sms_{tourist['id']}"):
            result = services.send_emergency(ctx, tourist["id"])
            if result["success"]:
                st.success(result["message"])
            else:
                st.warning(result.get("message") or result.get("error"))
