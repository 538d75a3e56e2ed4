# --------------------------------------------------------------
# File: 1_Registro_y_Login.py
# Description: Implementa las vistas de registro y autenticación de turistas.
# --------------------------------------------------------------

import streamlit as st

from api import services

ctx = services.get_context()

st.title("👤 Registro y Login")

tab_reg, tab_log = st.tabs(["Registro", "Login"])

# Sección de alta de nuevos turistas.
with tab_reg:
    with st.form("register"):
        payload = {
            "full_name": st.text_input("Nombre completo"),
            "nationality": st.text_input("Nacionalidad"),
            "passport": st.text_input("Pasaporte"),
            "phone": st.text_input("Teléfono"),
            "email": st.text_input("Email (opcional)"),
            "emergency_contact_name": st.text_input("Contacto de emergencia"),
            "emergency_contact_phone": st.text_input("Teléfono del contacto"),
            "emergency_contact_email": st.text_input("Email del contacto"),
            "password": st.text_input("Contraseña", type="password"),
        }
        submitted = st.form_submit_button("Crear ficha")

    if submitted:
        result = services.register(ctx, payload)
        if result["success"]:
            tourist = result["tourist"]
            st.success(f"Turista registrado: {tourist['id']}")
            st.code(f"tx_hash={tourist['tx_hash']}")
        else:
            st.error(result["error"])

# Sección de inicio de sesión.
with tab_log:
    passport = st.text_input("Pasaporte", key="log_passport")
    password = st.text_input("Contraseña", type="password", key="log_pass")

    if st.button("Iniciar sesión", key="btn_login"):
        result = services.login(ctx, passport, password)
        if result["success"]:
            # SECURITY: solo se conserva el perfil descifrado, nunca la contraseña.
            st.session_state["tourist"] = result["tourist"]
            st.success(f"Bienvenido, {result['tourist']['full_name']}")
        else:
            st.error(result["error"])
