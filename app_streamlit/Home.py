# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import logging

import streamlit as st

from api.services import get_context, sms_status

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Tourist Safety", page_icon="🛡️", layout="centered")

st.title("🛡️ Tourist Safety System")
st.write(
    "Registro de turistas con datos personales cifrados (AES-GCM por campo), "
    "login por descifrado y avisos SMS de emergencia al contacto designado."
)

# Construye el contexto al arrancar: sin ENCRYPTION_KEY la aplicación no sigue.
ctx = get_context()
status = sms_status(ctx)
if status["sms_available"]:
    st.success(status["message"])
else:
    st.warning(status["message"] + " - los avisos se simularán.")

st.info("Ve a **Registro y Login** para crear tu ficha de turista.")
