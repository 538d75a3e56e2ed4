# --------------------------------------------------------------
# File: 2_Emergencia.py
# Description: Botón SOS y avisos de geovalla para el turista autenticado.
# --------------------------------------------------------------

import streamlit as st

from api import services
from touristsafe.messages import GEOFENCE_BREACH, GEOFENCE_EXIT, SOS

ctx = services.get_context()

st.title("🚨 Emergencia")

tourist = st.session_state.get("tourist")
if not tourist:
    st.warning("Inicia sesión primero en la página de **Registro y Login**.")
    st.stop()

st.write(f"Turista: **{tourist['full_name']}** ({tourist['id']})")
location = st.text_input("Ubicación", value="Demo Map Zone")
kind = st.selectbox("Tipo de aviso", [SOS, GEOFENCE_BREACH, GEOFENCE_EXIT])
severity = "critical" if kind == SOS else "medium"

if st.button("Enviar aviso", type="primary"):
    outcome = services.raise_alert(
        ctx,
        tourist["id"],
        kind,
        message=f"{kind} reported by {tourist['full_name']}",
        severity=severity,
        location=location,
    )
    if outcome["alert"]["success"]:
        st.success(f"Alerta registrada: {outcome['alert']['alert_id']}")
    else:
        st.error(outcome["alert"]["error"])

    # El SMS solo se intenta si la alerta quedó guardada.
    sms = outcome["sms"] or {}
    if sms.get("success"):
        st.success(sms["message"])
    elif sms.get("sms_result", {}).get("simulated"):
        st.info("SMS simulado: el canal no está configurado.")
    elif sms:
        st.error(sms.get("message") or sms.get("error"))

st.subheader("Mis alertas")
mine = services.alerts_for_tourist(ctx, tourist["id"])
if mine["success"]:
    st.table(mine["alerts"])
else:
    st.error(mine["error"])
